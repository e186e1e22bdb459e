"""
Authentication domain exceptions.
"""

from huissier.domain.exceptions.base import HuissierException


class SignatureError(HuissierException):
    """Raised when the signed challenge cannot be verified."""

    def __init__(self, public_key: str):
        super().__init__(
            f"Signed message could not be verified for {public_key}",
            code="SIGNATURE_ERROR",
        )
        self.public_key = public_key


class AuthorizationDenied(HuissierException):
    """
    Raised when the requester is neither owner nor delegate in the realm.

    A negative result rather than a fault: converted to an unauthorized
    outcome by the orchestrator.
    """

    def __init__(self, public_key: str, realm_pub_key: str):
        super().__init__(
            f"{public_key} is not a member of realm {realm_pub_key}",
            code="AUTHORIZATION_DENIED",
        )
        self.public_key = public_key
        self.realm_pub_key = realm_pub_key
