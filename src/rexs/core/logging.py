"""
Structured logging for the model graph and the upgrade engine.

Every module logs through ``get_logger(__name__)`` with a dotted event name
and keyword fields; nothing is pre-formatted into the message::

    logger.info("upgrade.step_applied", from_version="1.2", to_version="1.3", notifications=4)

Context that holds for a whole stretch of work (the upgrade step being run,
the load case being overlaid) is bound once through contextvars and merged
into every event emitted inside it::

    with LogContext(upgrade_step="1.2->1.3"):
        ...  # every event carries upgrade_step

Nothing is configured at import time. Applications call
``configure_logging()`` once; until then structlog's defaults apply.

Processor chain::

    merge_contextvars -> add_log_level -> [TimeStamper(iso)]
        -> add_library_metadata -> StackInfoRenderer -> set_exc_info
        -> JSONRenderer | ConsoleRenderer

Tags:
    logging, structlog, contextvars, rexs-core

Doc-Types:
    api-reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from rexs.core.settings import get_settings

_library_metadata: dict[str, str] = {"service.name": "rexs"}


def _add_library_metadata(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    for key, value in _library_metadata.items():
        event_dict.setdefault(key, value)
    return event_dict


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    service: str = "rexs",
    add_timestamp: bool = True,
) -> None:
    """Configure structlog for the process.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. Defaults to ``REXS_LOG_LEVEL``.
        json_format: JSON lines when true, colored console when false.
            Defaults to ``REXS_LOG_JSON``, then to JSON unless stdout is a tty.
        service: Value of the ``service.name`` field on every event.
        add_timestamp: Prefix events with an ISO timestamp.
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if json_format is None:
        json_format = settings.log_json
    if json_format is None:
        json_format = not sys.stdout.isatty()

    _library_metadata["service.name"] = service

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
    ]
    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors += [
        _add_library_metadata,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer(colors=True),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Lazy structlog logger; ``name`` is carried as the ``logger_name`` field.

    The name goes in as an initial value rather than positionally: structlog
    hands positional arguments to the logger factory, which drops them.
    """
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(logger_name=name)


def bind_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Bind context variables for the duration of a ``with`` block.

    On exit every key gets back the value it had before, so nested scopes
    (an upgrade chain around a single step) do not clobber each other.
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> LogContext:
        self._tokens = dict(structlog.contextvars.bind_contextvars(**self._context))
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
        self._tokens = {}


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
