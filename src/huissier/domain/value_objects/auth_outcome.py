"""
AuthOutcome value object - terminal state of one authentication run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

IMPROPER_REQUEST_MESSAGE = "Improperly formatted request."
UNVERIFIED_SIGNATURE_MESSAGE = "Signed message could not be verified"
UNRESOLVED_MEMBERSHIP_MESSAGE = "Realm membership could not be resolved"
UNPROVISIONED_MESSAGE = "Chat membership could not be provisioned"


class AuthState(Enum):
    """States of the authentication flow."""

    RECEIVED = "received"
    VALIDATED = "validated"
    SIGNATURE_VERIFIED = "signature_verified"
    AUTHORIZED = "authorized"
    PROVISIONED = "provisioned"
    TOKEN_ISSUED = "token_issued"

    # Early-exit failure states
    INVALID_INPUT = "invalid_input"
    SIGNATURE_INVALID = "signature_invalid"
    UNAUTHORIZED = "unauthorized"
    RESOLUTION_FAILED = "resolution_failed"
    PROVISIONING_FAILED = "provisioning_failed"

    @property
    def is_failure(self) -> bool:
        """True for early-exit states."""
        return self in _FAILURE_STATES


_FAILURE_STATES = frozenset(
    {
        AuthState.INVALID_INPUT,
        AuthState.SIGNATURE_INVALID,
        AuthState.UNAUTHORIZED,
        AuthState.RESOLUTION_FAILED,
        AuthState.PROVISIONING_FAILED,
    }
)

_ERROR_MESSAGES = {
    AuthState.INVALID_INPUT: IMPROPER_REQUEST_MESSAGE,
    AuthState.SIGNATURE_INVALID: UNVERIFIED_SIGNATURE_MESSAGE,
    AuthState.RESOLUTION_FAILED: UNRESOLVED_MEMBERSHIP_MESSAGE,
    AuthState.PROVISIONING_FAILED: UNPROVISIONED_MESSAGE,
}


@dataclass(frozen=True)
class AuthOutcome:
    """
    Final result of AuthenticateRealmMember.

    Either an error payload or a chatAuthenticated payload, never both.
    """

    state: AuthState
    stream_token: Optional[str] = None

    def __post_init__(self):
        """Validate state/token pairing."""
        if self.state is AuthState.TOKEN_ISSUED and not self.stream_token:
            raise ValueError("Issued outcome requires a stream token")
        if self.state is not AuthState.TOKEN_ISSUED and self.stream_token:
            raise ValueError(f"State {self.state.value} cannot carry a token")
        if not self.state.is_failure and self.state is not AuthState.TOKEN_ISSUED:
            raise ValueError(f"State {self.state.value} is not terminal")

    @property
    def authenticated(self) -> bool:
        """True if a session token was issued."""
        return self.state is AuthState.TOKEN_ISSUED

    def to_response(self) -> dict:
        """Client-facing payload."""
        if self.authenticated:
            return {"chatAuthenticated": True, "streamToken": self.stream_token}
        if self.state is AuthState.UNAUTHORIZED:
            return {"chatAuthenticated": False}
        return {"error": _ERROR_MESSAGES[self.state]}
