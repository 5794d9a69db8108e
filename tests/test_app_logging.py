"""Tests for logging configuration."""

import logging

from home_kitchen.api.app import create_app
from home_kitchen.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("home_kitchen")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.level == logging.INFO


def test_configure_logging_applies_level_on_repeat_calls() -> None:
    logger = logging.getLogger("home_kitchen")

    configure_logging("DEBUG")
    debug_level = logger.level
    configure_logging()

    assert debug_level == logging.DEBUG
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1


def test_create_app_uses_configured_log_level(container) -> None:
    container.settings.log_level = "warning"

    create_app(container)

    assert logging.getLogger("home_kitchen").level == logging.WARNING
    configure_logging()
