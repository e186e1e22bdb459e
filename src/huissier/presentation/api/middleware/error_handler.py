"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from huissier.domain.exceptions import HuissierException
from huissier.domain.value_objects.auth_outcome import (
    IMPROPER_REQUEST_MESSAGE,
    UNPROVISIONED_MESSAGE,
    UNRESOLVED_MEMBERSHIP_MESSAGE,
    UNVERIFIED_SIGNATURE_MESSAGE,
)
from huissier.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

CHAT_UNAVAILABLE_MESSAGE = "Chat session could not be issued"

# code -> (status, client-facing message); internal detail never leaves
ERROR_RESPONSES = {
    "VALIDATION_ERROR": (status.HTTP_400_BAD_REQUEST, IMPROPER_REQUEST_MESSAGE),
    "SIGNATURE_ERROR": (status.HTTP_401_UNAUTHORIZED, UNVERIFIED_SIGNATURE_MESSAGE),
    "LEDGER_ERROR": (
        status.HTTP_503_SERVICE_UNAVAILABLE,
        UNRESOLVED_MEMBERSHIP_MESSAGE,
    ),
    "CHAT_BACKEND_ERROR": (status.HTTP_502_BAD_GATEWAY, CHAT_UNAVAILABLE_MESSAGE),
    "PROVISIONING_ERROR": (status.HTTP_502_BAD_GATEWAY, UNPROVISIONED_MESSAGE),
}


async def huissier_exception_handler(
    request: Request, exc: HuissierException
) -> JSONResponse:
    """
    Handle Huissier domain exceptions.

    Converts domain exceptions to fixed HTTP responses.
    """
    status_code, message = ERROR_RESPONSES.get(
        exc.code,
        (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"),
    )

    logger.error(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code},
    )

    return JSONResponse(status_code=status_code, content={"error": message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or missing fields get the same answer as bad shapes."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": IMPROPER_REQUEST_MESSAGE},
    )
