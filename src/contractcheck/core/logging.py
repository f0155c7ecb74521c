# src/contractcheck/core/logging.py
"""Structured logging for contractcheck.

Package modules obtain loggers with get_logger(__name__) and emit DEBUG
events (checks.executed, harness.released, ...). Each logger is bound to
the stdlib logger of the same name, so until configure_logging() runs the
events stop at a logger with no handler and the library stays silent.

configure_logging() attaches one handler to the "contractcheck" logger
only. The host application's root logger and its handlers are left
alone; test suites that want the events opt in explicitly:

    configure_logging()                       # from active_settings().logging
    configure_logging(LoggingSettings(level="DEBUG", json_output=True))
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import ProcessorFormatter

from contractcheck.core.config import LoggingSettings, active_settings

PACKAGE_LOGGER = "contractcheck"


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """ProcessorFormatter adds _record and _from_structlog to every record."""
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _clip_long_values(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Clip string fields (headings carry object reprs) like failure messages."""
    limit = active_settings().diagnostics.max_repr_length
    for key, value in event_dict.items():
        if key != "event" and isinstance(value, str) and len(value) > limit:
            event_dict[key] = value[: limit - 3] + "..."
    return event_dict


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Route contractcheck events to stderr as console lines or JSON.

    Safe to call repeatedly: the package logger's handler is replaced,
    never duplicated.

    Args:
        settings: Level and output format. None uses the logging section
            of the settings active in the calling context.
    """
    if settings is None:
        settings = active_settings().logging

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _clip_long_values,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.json_output:
        final_processors: list[Any] = [
            _drop_formatter_bookkeeping,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _drop_formatter_bookkeeping,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Disable caching to allow reconfiguration in tests
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=final_processors, foreign_pre_chain=shared_processors))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(settings.level)
    package_logger.propagate = False


def get_logger(name: str) -> Any:
    """Structlog logger bound to the stdlib logger called name.

    Processors come from the current structlog configuration at call time,
    so a later configure_logging() applies to loggers created at import.
    """
    return structlog.wrap_logger(logging.getLogger(name))
