"""Structured logging for set computations, built on structlog.

Support queries are usually issued from an outer analysis loop (a
reachability pipeline advancing step by step). The pipeline identifier and
the current step are kept in context variables and attached to every event,
so a debug line about a cache fill or a refinement can be traced back to the
step that caused it.

Output is either colored console text (development) or one JSON object per
line (production), selected by ``settings.LOG_FORMAT``.
"""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, cast

import structlog
from structlog.types import Processor

from lazyconvex.config import settings

_pipeline_id: ContextVar[str | None] = ContextVar("pipeline_id", default=None)
_step: ContextVar[int | None] = ContextVar("step", default=None)

_CORRELATION_VARS: dict[str, ContextVar[Any]] = {
    "pipeline_id": _pipeline_id,
    "step": _step,
}

_FORMATS = ("console", "json")


def set_correlation_context(
    pipeline_id: str | None = None,
    step: int | None = None,
) -> None:
    """Set correlation IDs for the current context.

    Arguments left as None keep their current value, so a loop can set the
    pipeline once and then only advance ``step``.

    Args:
        pipeline_id: Identifier of the analysis pipeline issuing queries.
        step: Current step, e.g. the time step of a reachability loop.
    """
    if pipeline_id is not None:
        _pipeline_id.set(pipeline_id)
    if step is not None:
        _step.set(step)


def clear_correlation_context() -> None:
    """Clear all correlation context variables."""
    for var in _CORRELATION_VARS.values():
        var.set(None)


@contextmanager
def correlation_context(
    pipeline_id: str | None = None,
    step: int | None = None,
) -> Iterator[None]:
    """Bind correlation IDs for the duration of a block.

    The previous values are restored on exit, also when the block raises.

    Example:
        with correlation_context(pipeline_id="reach-1", step=k):
            box = overapproximate(reach_set)
    """
    tokens: list[tuple[ContextVar[Any], Token[Any]]] = []
    for name, value in (("pipeline_id", pipeline_id), ("step", step)):
        if value is not None:
            var = _CORRELATION_VARS[name]
            tokens.append((var, var.set(value)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def _add_correlation_ids(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor adding the bound correlation IDs to an event."""
    _ = logger, method_name  # Required by structlog processor signature
    for name, var in _CORRELATION_VARS.items():
        value = var.get()
        if value is not None:
            event_dict[name] = value
    return event_dict


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"unknown log level: {level!r}")
    return number


def _renderer(log_format: str) -> list[Processor]:
    if log_format not in _FORMATS:
        raise ValueError(f"log format must be one of {_FORMATS}, got {log_format!r}")
    if log_format == "json":
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=True)]


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Install the structlog pipeline and matching stdlib logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to ``settings.LOG_LEVEL``.
        log_format: "console" or "json". Defaults to ``settings.LOG_FORMAT``.

    Raises:
        ValueError: If the level or the format is unknown.
    """
    level_number = _level_number(level or settings.LOG_LEVEL)
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_correlation_ids,
        *_renderer(log_format or settings.LOG_FORMAT),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level_number,
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually called with ``__name__``."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
