"""Spark runner option declarations.

The options cover Spark execution knobs such as the master address, the
streaming batch interval, checkpointing and the resources staged to
workers, together with the application identity and streaming flags they
depend on.

Usage
-----
Build the runner options for a job and read a computed default::

    from spark_options.spark import spark_pipeline_options

    options = spark_pipeline_options({"jobName": "demo"})
    options.get("checkpointDir")  # "/tmp/demo"
"""

from __future__ import annotations

import datetime as dt
import getpass
import re
import secrets
import sys
import typing as typ
from pathlib import Path

from .fields import OptionField, ValueType
from .option_set import OptionSet

__all__ = [
    "APPLICATION_FIELDS",
    "DEFAULT_APP_NAME",
    "DEFAULT_FILE_SYSTEM",
    "DEFAULT_MASTER_URL",
    "SPARK_FIELDS",
    "default_app_name",
    "default_job_name",
    "detect_resources_to_stage",
    "spark_pipeline_options",
    "tmp_checkpoint_dir",
]

DEFAULT_MASTER_URL = "local[4]"
DEFAULT_FILE_SYSTEM = "hdfs://localhost:9000"
DEFAULT_APP_NAME = "SparkRunner"

_JOB_NAME_UNSAFE = re.compile(r"[^a-z0-9-]")


def default_app_name(options: OptionSet) -> str:
    """Return the running script's stem, falling back to ``SparkRunner``."""
    script = Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else ""
    return script or DEFAULT_APP_NAME


def _normalise_job_part(text: str) -> str:
    return _JOB_NAME_UNSAFE.sub("", text.lower())


def default_job_name(options: OptionSet) -> str:
    """Return ``{appName}-{user}-{MMddHHmmss}-{random}`` in lower case."""
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = ""
    stamp = dt.datetime.now(dt.timezone.utc).strftime("%m%d%H%M%S")
    parts = [
        _normalise_job_part(options.get("appName")),
        _normalise_job_part(user),
        stamp,
        secrets.token_hex(4),
    ]
    return "-".join(part for part in parts if part)


def tmp_checkpoint_dir(options: OptionSet) -> str:
    """Return ``/tmp/${jobName}``.

    Only suitable for local testing; durable streaming jobs should point
    ``checkpointDir`` at a reliable filesystem such as HDFS, S3 or GS.
    """
    return "/tmp/" + options.get("jobName")


def detect_resources_to_stage(options: OptionSet) -> list[str]:
    """Return the local import path entries of the running interpreter."""
    return [entry for entry in sys.path if entry]


APPLICATION_FIELDS: tuple[OptionField, ...] = (
    OptionField(
        "appName",
        ValueType.STRING,
        default_rule=default_app_name,
        description="Name of the application, used when naming the job.",
    ),
    OptionField(
        "jobName",
        ValueType.STRING,
        default_rule=default_job_name,
        description="Name of the pipeline execution.",
    ),
    OptionField(
        "tempLocation",
        ValueType.STRING,
        default="",
        description=(
            "Path for temporary files. Empty means the host's temporary "
            "directory is used."
        ),
    ),
    OptionField(
        "streaming",
        ValueType.BOOL,
        default=False,
        description="Whether the pipeline runs in streaming mode.",
    ),
)

SPARK_FIELDS: tuple[OptionField, ...] = (
    OptionField(
        "masterAddress",
        ValueType.STRING,
        default=DEFAULT_MASTER_URL,
        description=(
            "The url of the spark master to connect to "
            "(e.g. spark://host:port, local[4])."
        ),
    ),
    OptionField(
        "sharedFileSystemRoot",
        ValueType.STRING,
        default=DEFAULT_FILE_SYSTEM,
        description="Shared file system.",
    ),
    OptionField(
        "batchIntervalMillis",
        ValueType.INT64,
        default=500,
        description="Batch interval for Spark streaming in milliseconds.",
    ),
    OptionField(
        "storageLevel",
        ValueType.STRING,
        default="MEMORY_AND_DISK",
        description="Batch default storage level.",
    ),
    OptionField(
        "minReadTimeMillis",
        ValueType.INT64,
        default=200,
        description="Minimum time to spend on read, for each micro-batch.",
    ),
    OptionField(
        "maxRecordsPerBatch",
        ValueType.INT64,
        default=-1,
        description="Max records per micro-batch. For streaming sources only.",
    ),
    OptionField(
        "readTimeFraction",
        ValueType.FLOAT64,
        default=0.1,
        description=(
            "A value between 0-1 describing the share of a micro-batch "
            "dedicated to reading from unbounded sources."
        ),
    ),
    OptionField(
        "checkpointDir",
        ValueType.STRING,
        default_rule=tmp_checkpoint_dir,
        description=(
            "A checkpoint directory for streaming resilience, ignored in "
            "batch. For durability, a reliable filesystem such as HDFS/S3/GS "
            "is necessary."
        ),
    ),
    OptionField(
        "checkpointDurationMillis",
        ValueType.INT64,
        default=-1,
        description=(
            "The period to checkpoint (in millis). The default (-1) leaves "
            "Spark to use max(slideDuration, 10 seconds)."
        ),
    ),
    OptionField(
        "bundleSize",
        ValueType.INT64,
        default=0,
        description=(
            "If set, used for splitting bounded sources; otherwise splitting "
            "follows Spark's default parallelism."
        ),
    ),
    OptionField(
        "enableMetricSinks",
        ValueType.BOOL,
        default=True,
        description="Enable/disable sending aggregator values to Spark's metric sinks.",
    ),
    OptionField(
        "usesProvidedContext",
        ValueType.BOOL,
        default=False,
        description="Whether the runner is initialised with a provided Spark context.",
    ),
    OptionField(
        "filesToStage",
        ValueType.STRING_LIST,
        default_rule=detect_resources_to_stage,
        description=(
            "Files to send to all workers. The default is every entry of "
            "the interpreter's import path."
        ),
    ),
    OptionField(
        "cacheDisabled",
        ValueType.BOOL,
        default=False,
        description=(
            "Disable caching of reused collections for the whole pipeline. "
            "Useful when recomputing is faster than storing."
        ),
    ),
)


def spark_pipeline_options(
    overrides: typ.Mapping[str, object] | None = None,
) -> OptionSet:
    """Return a fresh option set declaring every Spark runner option."""
    return OptionSet([*APPLICATION_FIELDS, *SPARK_FIELDS], overrides=overrides)
