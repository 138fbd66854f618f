"""Shared fixtures for the option resolution test suite."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from spark_options import OptionSet, spark_pipeline_options
from staging_test_helpers import RecordingPrepare


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an isolated workspace and make it the working directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove any ``SPARK_OPTIONS_*`` variables inherited from the shell."""
    for name in list(os.environ):
        if name.startswith("SPARK_OPTIONS_"):
            monkeypatch.delenv(name)


@pytest.fixture
def demo_options() -> OptionSet:
    """Return runner options for a job named ``demo``."""
    return spark_pipeline_options({"jobName": "demo"})


@pytest.fixture
def recording_prepare() -> RecordingPrepare:
    """Return a staging collaborator that records its inputs."""
    return RecordingPrepare()
