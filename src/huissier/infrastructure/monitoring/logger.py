"""
Structured logging for Huissier.

Every record is tagged with the current request ID by RequestContextFilter,
so JSON and plain output both correlate lines belonging to one
authentication.
"""

import json
import logging
import sys
from contextvars import ContextVar, Token
from typing import Any, Optional
from uuid import uuid4

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# LogRecord attributes; anything else on a record was passed via extra=
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "request_id"}

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("aiohttp", "asyncio", "httpx", "httpcore", "uvicorn.access")


class RequestContextFilter(logging.Filter):
    """Attach the active request ID ("-" outside a request) to records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Fields passed through extra= (public_key, realm, step, outcome, ...)
    are emitted at the top level next to the standard fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        entry["source"] = f"{record.module}:{record.lineno}"
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure the root logger.

    Args:
        level: Logging level name
        json_logs: JSON lines (production) or human-readable text
    """
    numeric_level = getattr(logging, level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestContextFilter())
    if json_logs:
        handler.setFormatter(JSONFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(request_id)s | "
                "%(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Module logger (call with __name__)."""
    return logging.getLogger(name)


def set_request_id(request_id: Optional[str] = None) -> Token:
    """
    Bind a request ID to the current context.

    Args:
        request_id: Caller-supplied ID; a UUID4 is generated if missing

    Returns:
        Token for reset_request_id
    """
    return request_id_ctx.set(request_id or str(uuid4()))


def reset_request_id(token: Token) -> None:
    """Restore the request ID that was active before set_request_id."""
    request_id_ctx.reset(token)


def get_request_id() -> Optional[str]:
    """Request ID of the current context, if any."""
    return request_id_ctx.get()
