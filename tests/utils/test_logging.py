"""Unit tests for the metabexplorer logging helpers."""

from __future__ import annotations

import logging
import sys

import pytest

from metabexplorer.utils.logging import (
    LOG_LEVEL_ENV,
    ROOT_LOGGER_NAME,
    configure_logging,
    get_logger,
)


@pytest.fixture
def package_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    saved_level = logger.level
    saved_handlers = logger.handlers[:]
    yield logger
    logger.handlers = saved_handlers
    logger.setLevel(saved_level)


def _stderr_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
    ]


def test_get_logger_default_is_package_logger():
    assert get_logger().name == ROOT_LOGGER_NAME
    assert get_logger("metabexplorer.explorer").name == "metabexplorer.explorer"


def test_configure_logging_only_touches_package_logger(package_logger):
    root_handlers = logging.getLogger().handlers[:]
    configure_logging("DEBUG", force=True)
    assert package_logger.level == logging.DEBUG
    assert logging.getLogger().handlers == root_handlers


def test_configure_logging_is_idempotent(package_logger):
    configure_logging("INFO", force=True)
    configure_logging("INFO")
    assert len(_stderr_handlers(package_logger)) == 1


def test_configure_logging_level_from_env(package_logger, monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "warning")
    configure_logging(force=True)
    assert package_logger.level == logging.WARNING


def test_configure_logging_unknown_level_falls_back_to_info(package_logger):
    configure_logging("chatty", force=True)
    assert package_logger.level == logging.INFO
