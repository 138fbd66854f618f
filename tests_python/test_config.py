"""Tests covering TOML override files and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from spark_options import (
    ConfigError,
    env_var_name,
    load_config,
    overrides_from_env,
    process_temp_directory,
    spark_pipeline_options,
)

CONFIG_TEXT = """\
[options]
masterAddress = "spark://cluster:7077"
batchIntervalMillis = 750

[profiles.streaming]
streaming = true
batchIntervalMillis = 1000
filesToStage = ["lib/app.jar"]
"""


@pytest.fixture
def config_file(workspace: Path) -> Path:
    """Write the sample override file into the workspace."""
    path = workspace / "spark-options.toml"
    path.write_text(CONFIG_TEXT, encoding="utf-8")
    return path


def test_load_config_base_options(config_file: Path) -> None:
    """Without a profile only ``[options]`` should be returned."""
    assert load_config(config_file) == {
        "masterAddress": "spark://cluster:7077",
        "batchIntervalMillis": 750,
    }


def test_load_config_profile_layers_over_options(config_file: Path) -> None:
    """Profile values should override the base table."""
    overrides = load_config(config_file, "streaming")
    assert overrides == {
        "masterAddress": "spark://cluster:7077",
        "batchIntervalMillis": 1000,
        "streaming": True,
        "filesToStage": ["lib/app.jar"],
    }


def test_loaded_overrides_apply_to_runner_options(config_file: Path) -> None:
    """Loaded overrides should feed straight into the runner options."""
    options = spark_pipeline_options(load_config(config_file, "streaming"))
    assert options.get("batchIntervalMillis") == 1000
    assert options.get("streaming") is True
    assert options.get("storageLevel") == "MEMORY_AND_DISK"


def test_load_config_missing_file(workspace: Path) -> None:
    """A missing file should raise ``FileNotFoundError``."""
    with pytest.raises(FileNotFoundError, match="Configuration file not found"):
        load_config(workspace / "absent.toml")


@pytest.mark.parametrize(
    ("toml_content", "profile", "expected_substring"),
    [
        pytest.param(CONFIG_TEXT, "batch", "Missing profile 'batch'", id="unknown_profile"),
        pytest.param('options = "flat"\n', None, "[options]", id="options_not_table"),
        pytest.param(
            "[options]\n[profiles]\nstreaming = 1\n",
            "streaming",
            "[profiles.streaming]",
            id="profile_not_table",
        ),
        pytest.param("[options\n", None, "Invalid TOML", id="invalid_toml"),
    ],
)
def test_load_config_validation_errors(
    workspace: Path, toml_content: str, profile: str | None, expected_substring: str
) -> None:
    """Malformed files should surface friendly ``ConfigError`` messages."""
    path = workspace / "spark-options.toml"
    path.write_text(toml_content, encoding="utf-8")
    with pytest.raises(ConfigError) as exc:
        load_config(path, profile)
    assert expected_substring in str(exc.value)


@pytest.mark.parametrize(
    ("option_name", "expected"),
    [
        ("masterAddress", "SPARK_OPTIONS_MASTER_ADDRESS"),
        ("batchIntervalMillis", "SPARK_OPTIONS_BATCH_INTERVAL_MILLIS"),
        ("filesToStage", "SPARK_OPTIONS_FILES_TO_STAGE"),
        ("streaming", "SPARK_OPTIONS_STREAMING"),
    ],
)
def test_env_var_name(option_name: str, expected: str) -> None:
    """Option names should map to upper snake case variables."""
    assert env_var_name(option_name) == expected


def test_overrides_from_env_skips_empty_values() -> None:
    """Only set, non-empty variables should produce overrides."""
    environ = {
        "SPARK_OPTIONS_JOB_NAME": "nightly",
        "SPARK_OPTIONS_STORAGE_LEVEL": "",
        "UNRELATED": "x",
    }
    overrides = overrides_from_env(["jobName", "storageLevel", "bundleSize"], environ)
    assert overrides == {"jobName": "nightly"}


def test_overrides_from_env_reads_process_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The process environment should be consulted by default."""
    monkeypatch.setenv("SPARK_OPTIONS_BUNDLE_SIZE", "64")
    options = spark_pipeline_options(overrides_from_env(["bundleSize"]))
    assert options.get("bundleSize") == 64


def test_process_temp_directory_exists() -> None:
    """The host scratch directory should be an existing directory."""
    assert Path(process_temp_directory()).is_dir()
