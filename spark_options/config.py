"""Loader for TOML files carrying option overrides.

An override file holds a base ``[options]`` table and any number of named
``[profiles.<name>]`` tables layered on top of it.

Usage
-----
Load the overrides for the ``streaming`` profile::

    from pathlib import Path
    from spark_options.config import load_config

    overrides = load_config(Path("spark-options.toml"), "streaming")

with a file such as::

    [options]
    masterAddress = "spark://cluster:7077"

    [profiles.streaming]
    streaming = true
    batchIntervalMillis = 1000
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import tomllib

from .errors import ConfigError

__all__ = ["load_config"]


def load_config(config_file: Path, profile: str | None = None) -> dict[str, typ.Any]:
    """Return the overrides in ``config_file`` for ``profile``.

    Parameters
    ----------
    config_file : Path
        Path to the TOML override file.
    profile : str | None, optional
        Name of the ``[profiles.*]`` table merged over ``[options]``.

    Returns
    -------
    dict[str, Any]
        Option name to value, profile values taking precedence.

    Raises
    ------
    FileNotFoundError
        Raised when the file is absent at ``config_file``.
    ConfigError
        Raised when the file is not valid TOML, a section is not a table or
        ``profile`` is not defined.
    """
    config_file = Path(config_file)
    if not config_file.is_file():
        message = f"Configuration file not found at {config_file}"
        raise FileNotFoundError(message)

    data = _load_toml(config_file)
    overrides = dict(_require_table(data.get("options", {}), "options", config_file))
    if profile is None:
        return overrides

    profiles = _require_table(data.get("profiles", {}), "profiles", config_file)
    try:
        selected = profiles[profile]
    except KeyError as exc:
        message = f"Missing profile '{profile}' in {config_file}"
        raise ConfigError(message) from exc
    return overrides | _require_table(selected, f"profiles.{profile}", config_file)


def _load_toml(path: Path) -> dict[str, typ.Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        message = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(message) from exc


def _require_table(
    section: object, label: str, config_path: Path
) -> dict[str, typ.Any]:
    """Return ``section`` when it is a TOML table.

    Examples
    --------
    >>> _require_table({"a": 1}, "options", Path("cfg"))  # doctest: +SKIP
    {'a': 1}
    """
    if not isinstance(section, dict):
        message = f"[{label}] in {config_path} must be a table of key/value pairs"
        raise ConfigError(message)
    return section
