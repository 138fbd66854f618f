"""Environment helpers shared by option resolution and staging."""

from __future__ import annotations

import os
import re
import tempfile
import typing as typ

__all__ = [
    "ENV_PREFIX",
    "env_var_name",
    "overrides_from_env",
    "process_temp_directory",
]

ENV_PREFIX = "SPARK_OPTIONS_"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def process_temp_directory() -> str:
    """Return the host's default scratch directory."""
    return tempfile.gettempdir()


def env_var_name(option_name: str, prefix: str = ENV_PREFIX) -> str:
    """Return the environment variable consulted for ``option_name``.

    Examples
    --------
    >>> env_var_name("batchIntervalMillis")
    'SPARK_OPTIONS_BATCH_INTERVAL_MILLIS'
    """
    return prefix + _CAMEL_BOUNDARY.sub("_", option_name).upper()


def overrides_from_env(
    names: typ.Iterable[str],
    environ: typ.Mapping[str, str] | None = None,
    prefix: str = ENV_PREFIX,
) -> dict[str, str]:
    """Return raw text overrides for ``names`` found in ``environ``.

    Parameters
    ----------
    names:
        Option names to look up.
    environ:
        Environment mapping; defaults to :data:`os.environ`.
    prefix:
        Prefix prepended to each derived variable name.

    Returns
    -------
    dict[str, str]
        Option name to raw value for every variable that is set and
        non-empty.
    """
    source = os.environ if environ is None else environ
    overrides: dict[str, str] = {}
    for name in names:
        if value := source.get(env_var_name(name, prefix)):
            overrides[name] = value
    return overrides
