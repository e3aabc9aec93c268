"""Shared fixtures for pvsaction tests."""

import logging
import os
from pathlib import Path

import pytest

from pvsaction.config.settings import ComponentKind, Settings

from tests.fakes import FakeBackend


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove runner and license variables that would leak into tests."""
    for name in list(os.environ):
        if name.startswith(("INPUT_", "PVS_STUDIO_")) or name in (
            "GITHUB_ACTIONS",
            "GITHUB_OUTPUT",
            "RUNNER_DEBUG",
        ):
            monkeypatch.delenv(name, raising=False)
    yield
    logger = logging.getLogger("pvsaction")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def settings(tmp_path):
    """Settings writing temporary files below tmp_path."""
    return Settings(temp_dir=tmp_path / "tmp")


@pytest.fixture
def backend(settings):
    """Fake backend with every component installed."""
    return FakeBackend(
        settings,
        components={
            ComponentKind.ANALYZER_FRONT_END: Path("/opt/pvs/pvs-studio-analyzer"),
            ComponentKind.ANALYZER_CORE: Path("/opt/pvs/pvs-studio"),
            ComponentKind.REPORT_CONVERTER: Path("/opt/pvs/plog-converter"),
        },
    )
