"""
Domain exceptions package.
"""

# Auth exceptions
from huissier.domain.exceptions.auth import AuthorizationDenied, SignatureError

# Base exceptions
from huissier.domain.exceptions.base import HuissierException, ValidationError

# Chat exceptions
from huissier.domain.exceptions.chat import ChatBackendError, ProvisioningError

# Ledger exceptions
from huissier.domain.exceptions.ledger import AccountDecodeError, LedgerError

__all__ = [
    # Base
    "HuissierException",
    "ValidationError",
    # Auth
    "SignatureError",
    "AuthorizationDenied",
    # Ledger
    "LedgerError",
    "AccountDecodeError",
    # Chat
    "ChatBackendError",
    "ProvisioningError",
]
