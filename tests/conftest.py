"""Pytest configuration and fixtures."""

import io
import logging

import pytest


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up ticktest loggers after each test to prevent name collisions."""
    yield

    # Remove all ticktest loggers from registry
    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("ticktest")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def stream():
    """In-memory stream that collects the runner's console report."""
    return io.StringIO()
