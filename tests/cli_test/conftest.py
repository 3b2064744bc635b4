"""Pytest configuration for CLI tests."""

import sys
from collections.abc import Generator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def restore_logger() -> Generator[None]:
    """Restore the default loguru sink replaced by the CLI."""
    yield
    logger.remove()
    logger.add(sys.stderr)
