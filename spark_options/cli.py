"""Command-line entry point for resolving Spark runner options.

Examples
--------
Resolve the options for a local run, overriding the batch interval::

    spark-options --set batchIntervalMillis=1000

Layer a TOML profile under environment overrides and stage resources::

    export SPARK_OPTIONS_JOB_NAME=nightly
    spark-options spark-options.toml --profile streaming --stage

List every option with its type and default::

    spark-options describe
"""

from __future__ import annotations

import json
import os
import sys
import typing as typ
from pathlib import Path

import cyclopts

from .config import load_config
from .environment import overrides_from_env
from .errors import ConfigError, OptionError, StagingError
from .fields import OptionField
from .option_set import OptionSet
from .spark import spark_pipeline_options
from .staging import prepare_files_to_stage

__all__ = ["app", "build_options", "describe", "main", "parse_assignments"]

app = cyclopts.App(
    name="spark-options",
    help="Resolve Spark runner options and print them as JSON.",
)


def parse_assignments(assignments: typ.Iterable[str]) -> dict[str, str]:
    """Return ``name=value`` pairs as a mapping.

    Raises
    ------
    ConfigError
        Raised when an assignment lacks ``=`` or a name.
    """
    parsed: dict[str, str] = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        name = name.strip()
        if not sep or not name:
            message = f"Overrides must look like name=value, got {assignment!r}"
            raise ConfigError(message)
        parsed[name] = value
    return parsed


def build_options(
    config_file: Path | None = None,
    *,
    profile: str | None = None,
    assignments: typ.Iterable[str] = (),
    environ: typ.Mapping[str, str] | None = None,
) -> OptionSet:
    """Return runner options with every override source applied.

    Later sources win: configuration file, then profile, then environment
    variables, then ``assignments``.
    """
    options = spark_pipeline_options()
    if config_file is not None:
        options.apply_overrides(load_config(config_file, profile))
    elif profile is not None:
        message = "A profile requires a configuration file"
        raise ConfigError(message)
    env = os.environ if environ is None else environ
    options.apply_overrides(overrides_from_env(options.names, env))
    options.apply_overrides(parse_assignments(assignments))
    return options


@app.default
def main(
    config_file: Path | None = None,
    *,
    profile: str | None = None,
    overrides: typ.Annotated[
        list[str] | None, cyclopts.Parameter(name=["--set", "-s"])
    ] = None,
    stage: bool = False,
) -> None:
    """Resolve every option and print the result as JSON.

    Parameters
    ----------
    config_file:
        Optional TOML file holding ``[options]`` and ``[profiles.*]`` tables.
    profile:
        Profile in ``config_file`` layered over its ``[options]`` table.
    overrides:
        ``name=value`` assignments applied last.
    stage:
        Finalise ``filesToStage`` before printing.
    """
    try:
        options = build_options(
            config_file, profile=profile, assignments=overrides or ()
        )
        if stage:
            prepare_files_to_stage(options)
        resolved = options.resolve_all()
    except (FileNotFoundError, OptionError, StagingError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(json.dumps(resolved, indent=2))


def _describe_default(field: OptionField) -> str:
    if field.computed:
        return "<computed>"
    if field.required:
        return "<required>"
    return json.dumps(field.default)


@app.command
def describe() -> None:
    """List every option with its type, default and description."""
    for field in spark_pipeline_options().fields:
        print(f"{field.name} ({field.value_type.value}) = {_describe_default(field)}")
        if field.description:
            print(f"    {field.description}")


if __name__ == "__main__":  # pragma: no cover - exercised via CLI
    app()
