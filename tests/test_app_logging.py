"""Tests for logging configuration."""

import logging

from panda_gallery.api.app import create_app
from panda_gallery.app_logging import configure_logging
from panda_gallery.containers import AppContainer


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("panda_gallery")
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False


def test_configure_logging_updates_level() -> None:
    logger = logging.getLogger("panda_gallery")

    configure_logging(logging.DEBUG)
    assert logger.level == logging.DEBUG

    configure_logging()
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1


def test_create_app_uses_debug_setting(container: AppContainer) -> None:
    logger = logging.getLogger("panda_gallery")
    container.settings.debug = True

    create_app(container)
    assert logger.level == logging.DEBUG

    container.settings.debug = False
    create_app(container)
    assert logger.level == logging.INFO
