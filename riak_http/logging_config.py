"""
Structured logging for Riak HTTP.

Every module logs through ``get_logger``. ``setup_logging`` (or
``setup_logging_from_config`` with a loaded ``RiakHttpConfig``) routes those
records to stderr or a file, rendered as JSON lines or as console output. A
correlation ID set with ``set_correlation_id`` is stamped on each record so the
requests issued for one caller operation can be grouped.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

import structlog
from structlog.types import EventDict, Processor

if TYPE_CHECKING:
    from riak_http.config.settings import RiakHttpConfig

LOGGER_PREFIX = "riak_http"

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """structlog processor stamping the context's correlation ID, if any."""
    correlation_id = correlation_id_var.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: ID to bind; a random UUID4 when omitted

    Returns:
        The bound ID
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


def clear_correlation_id() -> None:
    correlation_id_var.set(None)


def _build_handler(log_file: Optional[Union[str, Path]]) -> logging.Handler:
    if log_file is None:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    else:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path)
    # structlog renders the full line; the stdlib formatter passes it through
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _build_processors(json_format: bool) -> List[Processor]:
    renderer: Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = True,
) -> None:
    """
    Route structlog output through the stdlib root logger.

    Handlers installed by an earlier call are replaced, so calling this again
    reconfigures rather than duplicates output.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to INFO
        log_file: File to append records to; stderr when None
        json_format: JSON lines when True, console rendering otherwise
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = _build_handler(log_file)
    handler.setLevel(numeric_level)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
        existing.close()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    structlog.configure(
        processors=_build_processors(json_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_config(config: "RiakHttpConfig") -> None:
    """Apply the ``logging`` section of a loaded configuration."""
    settings = config.logging
    setup_logging(
        level=settings.level,
        log_file=settings.file or None,
        json_format=settings.json_format,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Logger for a module, namespaced under ``riak_http``.

    Module ``__name__`` values that already carry the prefix are used as is.
    """
    if name != LOGGER_PREFIX and not name.startswith(f"{LOGGER_PREFIX}."):
        name = f"{LOGGER_PREFIX}.{name}"
    return structlog.get_logger(name)


def log_http_request(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    status_code: int,
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """
    Log one dispatched request.

    A status code of 0 means the transport failed before a status arrived;
    those are logged at warning level, completed round trips at debug.
    """
    log_data: Dict[str, Any] = {
        "event_type": "http_request",
        "method": method,
        "url": url,
        "status_code": status_code,
        "duration_ms": duration_ms,
        **kwargs,
    }

    if status_code:
        logger.debug("http_request", **log_data)
    else:
        logger.warning("http_request_failed", **log_data)
