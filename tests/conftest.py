"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest
from loguru import logger

from cienv.utils.logger import clear_secrets


@pytest.fixture
def clean_env(monkeypatch):
    """Clear the process environment for the duration of a test."""
    for key in list(os.environ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks and registered secrets added by a test."""
    yield
    logger.remove()
    clear_secrets()
