"""Default preparation of resources before they are staged to workers.

Plain files are staged as they are. Directories cannot be shipped to a
worker classpath directly, so each is zipped into ``<base_dir>/<hash>.jar``
where ``hash`` digests the directory contents; an archive with the same
digest is reused.
"""

from __future__ import annotations

import hashlib
import logging
import os
import typing as typ
import zipfile
from pathlib import Path

from .errors import StagingError

__all__ = ["directory_content_hash", "prepare_files_for_staging"]

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 8192


def _iter_directory_files(directory: Path) -> typ.Iterator[Path]:
    for path in sorted(directory.rglob("*")):
        if path.is_file():
            yield path


def directory_content_hash(directory: Path, algorithm: str = "sha256") -> str:
    """Return a digest of every file name and payload beneath ``directory``.

    Parameters
    ----------
    directory:
        Directory whose contents should be hashed.
    algorithm:
        Hashing algorithm name supported by :mod:`hashlib`.

    Returns
    -------
    str
        Hex digest that changes whenever a file is added, removed, renamed or
        edited.
    """
    hasher = hashlib.new(algorithm)
    for path in _iter_directory_files(directory):
        hasher.update(path.relative_to(directory).as_posix().encode("utf-8"))
        hasher.update(b"\0")
        with path.open("rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                hasher.update(chunk)
    return hasher.hexdigest()


def _zip_directory(directory: Path, archive: Path) -> None:
    partial = archive.with_name(f"{archive.name}.partial")
    try:
        with zipfile.ZipFile(
            partial, "w", compression=zipfile.ZIP_DEFLATED
        ) as bundle:
            for path in _iter_directory_files(directory):
                bundle.write(path, path.relative_to(directory).as_posix())
    except BaseException:
        partial.unlink(missing_ok=True)
        raise
    partial.replace(archive)


def _package_directory(directory: Path, base_dir: str) -> str:
    if not base_dir:
        message = (
            f"Cannot package directory '{directory}': "
            "provide a temporary location for storing the archives."
        )
        raise StagingError(message)
    target_dir = Path(base_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    archive = target_dir / f"{directory_content_hash(directory)}.jar"
    if archive.is_file():
        logger.debug("Reusing archive %s for %s", archive, directory)
    else:
        _zip_directory(directory, archive)
        logger.info("Packaged %s into %s", directory, archive)
    return os.path.abspath(archive)


def prepare_files_for_staging(paths: typ.Sequence[str], base_dir: str) -> list[str]:
    """Return ``paths`` ready for staging, packaging directories as archives.

    Parameters
    ----------
    paths:
        Local files and directories to stage, in classpath order.
    base_dir:
        Directory receiving the archives built from directories.

    Returns
    -------
    list[str]
        Absolute paths in input order with duplicates removed.

    Raises
    ------
    StagingError
        Raised when a path does not exist, or when a directory must be
        packaged but ``base_dir`` is empty.
    """
    prepared: list[str] = []
    seen: set[str] = set()
    for raw in paths:
        path = Path(raw)
        if not raw or not path.exists():
            message = f"To-be-staged file does not exist: '{raw}'"
            raise StagingError(message)
        staged = (
            _package_directory(path, base_dir)
            if path.is_dir()
            else os.path.abspath(path)
        )
        if staged not in seen:
            seen.add(staged)
            prepared.append(staged)
    return prepared
