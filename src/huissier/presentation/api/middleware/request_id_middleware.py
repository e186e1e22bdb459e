"""
Request ID middleware.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from huissier.infrastructure.monitoring.logger import (
    get_logger,
    get_request_id,
    reset_request_id,
    set_request_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Bind a request ID for the duration of each request.

    The caller's X-Request-ID is reused when present. The ID is echoed
    back on the response and attached to every log record in between.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        token = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id = get_request_id()
        start_time = time.time()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.debug(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={"duration_ms": round((time.time() - start_time) * 1000, 1)},
            )
            return response
        finally:
            reset_request_id(token)
