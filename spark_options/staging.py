"""Resolve the resources handed to workers before a job starts.

Classpath-style resource lists routinely contain stale entries, so the
resolver keeps only candidates that exist right now, makes them absolute
and passes them to a preparation collaborator together with the directory
it may write archives into.

Usage
-----
Finalise the ``filesToStage`` option of a runner option set::

    from spark_options.spark import spark_pipeline_options
    from spark_options.staging import prepare_files_to_stage

    options = spark_pipeline_options({"filesToStage": ["app.jar", "classes"]})
    prepare_files_to_stage(options)
"""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

from .environment import process_temp_directory
from .packaging import prepare_files_for_staging

if typ.TYPE_CHECKING:
    from .option_set import OptionSet

__all__ = [
    "PrepareFiles",
    "TempDirProvider",
    "existing_absolute_paths",
    "prepare_files_to_stage",
    "resolve_base_dir",
    "resolve_files_to_stage",
]

logger = logging.getLogger(__name__)

PrepareFiles = typ.Callable[[list[str], str], typ.Sequence[str]]
TempDirProvider = typ.Callable[[], str]


def existing_absolute_paths(candidates: typ.Iterable[str]) -> list[str]:
    """Return the candidates that exist, as absolute paths, in input order.

    Directories count as existing. Symlinks are not resolved. Missing
    entries are skipped without raising.

    Examples
    --------
    >>> existing_absolute_paths(["/", "/definitely/missing"])
    ['/']
    """
    present: list[str] = []
    for candidate in candidates:
        if candidate and Path(candidate).exists():
            present.append(os.path.abspath(candidate))
        else:
            logger.debug("Skipping missing staging candidate %r", candidate)
    return present


def resolve_base_dir(
    temp_location_override: str | None,
    temp_dir: TempDirProvider = process_temp_directory,
) -> str:
    """Return ``temp_location_override`` when non-empty, else ``temp_dir()``."""
    return temp_location_override or temp_dir()


def resolve_files_to_stage(
    candidates: typ.Sequence[str],
    temp_location_override: str | None = None,
    *,
    prepare: PrepareFiles = prepare_files_for_staging,
    temp_dir: TempDirProvider = process_temp_directory,
) -> typ.Sequence[str]:
    """Return the final list of resources to stage.

    Parameters
    ----------
    candidates:
        Local paths in classpath order. Order is preserved.
    temp_location_override:
        Directory handed to ``prepare``; empty or ``None`` falls back to
        ``temp_dir()``.
    prepare:
        Collaborator turning existing absolute paths into stageable paths.
        Its result is returned unchanged and its errors propagate.
    temp_dir:
        Provider of the host scratch directory.

    Returns
    -------
    Sequence[str]
        The object returned by ``prepare``, unmodified.
    """
    paths = existing_absolute_paths(candidates)
    base_dir = resolve_base_dir(temp_location_override, temp_dir)
    return prepare(paths, base_dir)


def prepare_files_to_stage(
    options: OptionSet,
    *,
    prepare: PrepareFiles = prepare_files_for_staging,
    temp_dir: TempDirProvider = process_temp_directory,
) -> list[str]:
    """Resolve ``filesToStage`` of ``options`` and write the result back.

    ``tempLocation`` supplies the archive directory when configured.
    """
    staged = resolve_files_to_stage(
        options.get("filesToStage"),
        options.get("tempLocation"),
        prepare=prepare,
        temp_dir=temp_dir,
    )
    options.set("filesToStage", staged)
    return options.get("filesToStage")
