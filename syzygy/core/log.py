"""Structured logging helpers built on structlog."""
from __future__ import annotations

import logging
from typing import Any, Optional

import structlog

logger = structlog.get_logger()


class ConsoleLogger:
    """Default :class:`~syzygy.core.models.Logger` writing through structlog.

    Each instance binds its own ``component`` so agents and orchestrators are
    distinguishable in the output.
    """

    def __init__(self, component: str = "syzygy", bound: Optional[Any] = None) -> None:
        self.component = component
        self._log = (bound or logger).bind(component=component)

    def log(self, message: str, data: Any = None) -> None:
        if data is None:
            self._log.info(message)
        else:
            self._log.info(message, data=data)

    def error(self, message: str, error: Optional[BaseException] = None) -> None:
        if error is None:
            self._log.error(message)
        else:
            self._log.error(message, error=str(error), exc_info=error)


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog processors once at process start."""
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        cache_logger_on_first_use=False,
    )


def safe_log(target: Optional[Any], message: str, data: Any = None) -> None:
    """Forward to ``target.log``; a missing or failing logger never raises."""
    if target is None:
        return
    try:
        target.log(message, data)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Logger call failed", message=message, error=str(exc))


def safe_error(target: Optional[Any], message: str, error: Optional[BaseException] = None) -> None:
    """Forward to ``target.error``; a missing or failing logger never raises."""
    if target is None:
        return
    try:
        target.error(message, error)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Logger call failed", message=message, error=str(exc))
