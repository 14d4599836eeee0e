"""structlog setup for the client.

Library code only asks for loggers. Handlers are attached by
``configure_logging``, which the CLI calls once at startup; an application
embedding the client can skip it and route the ``zimbra_mail`` stdlib logger
wherever it likes.
"""

from __future__ import annotations

import logging
from typing import Any, MutableMapping

import structlog

from zimbra_mail.config import LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

ROOT_LOGGER_NAME = "zimbra_mail"
SECRET_KEYS = frozenset({"token", "auth_token", "csrf_token", "password", "secret", "cookie"})

_structlog_ready = False
_handlers_attached = False


def _level(value: str) -> int:
    """"10", "debug" or "DEBUG" -> logging level; unknown names fall back to INFO."""
    if value.isdigit():
        return int(value)
    return getattr(logging, value.upper(), logging.INFO)


def redact_secrets(_logger: Any, _method: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Mask credential values passed as log keys."""
    for key in SECRET_KEYS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = "***"
    return event_dict


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _setup_structlog() -> None:
    global _structlog_ready
    if _structlog_ready:
        return
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _structlog_ready = True


def configure_logging(level: str | None = None, log_file: str | None = None) -> None:
    """Attach a console handler and, when a file is configured, a JSONL one.

    Defaults come from LOG_LEVEL / VERBOSE_LOGGING and LOG_FILE. Calling it
    again is a no-op.
    """
    global _handlers_attached
    _setup_structlog()
    if _handlers_attached:
        return

    if level is not None:
        effective_level = _level(level)
    else:
        effective_level = logging.DEBUG if VERBOSE_LOGGING else _level(LOG_LEVEL)
    log_file = LOG_FILE if log_file is None else log_file
    pre_chain = _shared_processors()

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(effective_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=pre_chain,
        )
    )
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=pre_chain,
            )
        )
        package_logger.addHandler(file_handler)

    # httpx logs every request line at INFO; transport.response already covers it
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    _handlers_attached = True


def get_logger(name: str = ROOT_LOGGER_NAME, **bindings: Any) -> BoundLogger:
    """Structured logger for ``name`` (a ``zimbra_mail.*`` dotted name), optionally pre-bound."""
    _setup_structlog()
    logger = structlog.get_logger(name)
    return logger.bind(**bindings) if bindings else logger


def bind_context(**context: Any) -> None:
    """Attach key/values to every event logged from the current context (e.g. the CLI command)."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
