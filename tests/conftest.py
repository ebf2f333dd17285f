"""Shared pytest fixtures."""

import logging
from pathlib import Path

import pytest

from transcription_diff.logging.context import clear_log_context

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ENV_VARS = ["LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "MAX_TRANSCRIPT_LENGTH"]


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Start every test from a clean environment for the variables we read."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Undo root logger changes made by configure_logging()."""
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level
    clear_log_context()
    yield
    clear_log_context()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
