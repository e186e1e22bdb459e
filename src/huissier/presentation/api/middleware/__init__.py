"""
API middleware and exception handlers.
"""

from huissier.presentation.api.middleware.error_handler import (
    huissier_exception_handler,
    request_validation_handler,
)
from huissier.presentation.api.middleware.request_id_middleware import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIDMiddleware",
    "huissier_exception_handler",
    "request_validation_handler",
]
