"""
Tests for logging setup.
"""

import logging

import pytest
import structlog

from court_booking.core.config import Settings
from court_booking.core.logging import QUIET_LOGGERS, _service_context, setup_logging


@pytest.fixture
def restore_logging():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    for name, saved in levels.items():
        logging.getLogger(name).setLevel(saved)
    structlog.reset_defaults()


def test_events_carry_service_and_mode():
    add_context = _service_context(Settings(SCHEDULING_MODE="shared"))
    event = add_context(None, "info", {"event": "reservation_joined"})
    assert event["service"] == "Court Booking API"
    assert event["scheduling_mode"] == "shared"


def test_setup_installs_single_handler(restore_logging):
    settings = Settings(LOG_LEVEL="warning", ENVIRONMENT="production")
    setup_logging(settings)
    handler = setup_logging(settings)

    root_logger = logging.getLogger()
    assert root_logger.handlers == [handler]
    assert root_logger.level == logging.WARNING
    assert logging.getLogger("passlib").level == logging.ERROR
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_debug_lets_sql_through(restore_logging):
    setup_logging(Settings(DEBUG=True))
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
