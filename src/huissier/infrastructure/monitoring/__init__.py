"""
Monitoring: structured logging and Prometheus metrics.
"""

from huissier.infrastructure.monitoring.logger import (
    JSONFormatter,
    RequestContextFilter,
    get_logger,
    get_request_id,
    reset_request_id,
    set_request_id,
    setup_logging,
)

__all__ = [
    "JSONFormatter",
    "RequestContextFilter",
    "get_logger",
    "get_request_id",
    "reset_request_id",
    "set_request_id",
    "setup_logging",
]
