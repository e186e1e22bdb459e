"""
API schemas.
"""

from huissier.presentation.schemas.auth_schemas import (
    AuthenticateRequest,
    AuthenticateResponse,
    RealmSchema,
)

__all__ = [
    "AuthenticateRequest",
    "AuthenticateResponse",
    "RealmSchema",
]
