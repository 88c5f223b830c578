"""
Structured logging for the court booking service.

structlog sits in front of stdlib logging so uvicorn, SQLAlchemy and our
own events share one handler. Every line carries the service name and the
scheduling mode, since exclusive and shared deployments log the same event
names with different meanings.
"""

import logging
import sys

import structlog

from court_booking.core.config import Settings, get_settings

# Third-party loggers and the level they are held at
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    # passlib warns on every start about the bcrypt version attribute
    "passlib": logging.ERROR,
}


def _service_context(settings: Settings):
    service = settings.APP_NAME
    mode = settings.SCHEDULING_MODE

    def add_service_context(logger, method_name, event_dict):
        event_dict.setdefault("service", service)
        event_dict.setdefault("scheduling_mode", mode)
        return event_dict

    return add_service_context


def _renderer(settings: Settings):
    if settings.ENVIRONMENT == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(settings: Settings = None) -> logging.Handler:
    """Configure structlog and the root logger; returns the installed handler."""
    settings = settings or get_settings()

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _service_context(settings),
    ]
    if settings.ENVIRONMENT == "production":
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings),
            ],
        )
    )

    root_logger = logging.getLogger()
    # Lifespan can run more than once per process (tests, reloads)
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
    if settings.DEBUG:
        # DEBUG turns on engine echo; let the statements through
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return handler


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
