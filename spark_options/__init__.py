"""Public interface for the Spark runner options package."""

from .config import load_config
from .environment import env_var_name, overrides_from_env, process_temp_directory
from .errors import (
    ConfigError,
    CyclicDefaultError,
    DuplicateFieldError,
    MissingValueError,
    OptionError,
    StagingError,
    TypeMismatchError,
    UnknownFieldError,
)
from .fields import OptionField, ValueType
from .option_set import OptionSet
from .packaging import prepare_files_for_staging
from .spark import DEFAULT_FILE_SYSTEM, DEFAULT_MASTER_URL, spark_pipeline_options
from .staging import prepare_files_to_stage, resolve_files_to_stage

__all__ = [
    "ConfigError",
    "CyclicDefaultError",
    "DEFAULT_FILE_SYSTEM",
    "DEFAULT_MASTER_URL",
    "DuplicateFieldError",
    "MissingValueError",
    "OptionError",
    "OptionField",
    "OptionSet",
    "StagingError",
    "TypeMismatchError",
    "UnknownFieldError",
    "ValueType",
    "env_var_name",
    "load_config",
    "overrides_from_env",
    "prepare_files_for_staging",
    "prepare_files_to_stage",
    "process_temp_directory",
    "resolve_files_to_stage",
    "spark_pipeline_options",
]
