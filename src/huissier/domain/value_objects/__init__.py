"""
Domain value objects package.
"""

from huissier.domain.value_objects.auth_outcome import AuthOutcome, AuthState
from huissier.domain.value_objects.call_result import CallResult, capture

__all__ = [
    "AuthOutcome",
    "AuthState",
    "CallResult",
    "capture",
]
