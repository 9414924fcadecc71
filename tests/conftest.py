"""Pytest configuration for the numsort test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

import numsort.log as log_module
from numsort.compare import get_comparator
from numsort.log import logger


@pytest.fixture
def reset_logger() -> Iterator[None]:
    """Detach ``numsort`` handlers for the test and restore them afterwards."""
    prev_handlers = list(logger.handlers)
    prev_level = logger.level
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    try:
        yield
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.handlers.extend(prev_handlers)
        logger.setLevel(prev_level)


@pytest.fixture
def log_dir_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "logs"
    monkeypatch.setenv(log_module.LOG_DIR_ENV, str(path))
    return path


@pytest.fixture(autouse=True)
def _clear_comparator_cache() -> Iterator[None]:
    yield
    get_comparator.cache_clear()
