"""
Auth request validator.

Syntactic checks run before any network call.
"""

import re
from typing import List, Tuple

from huissier.domain.entities.auth_request import AuthRequest

# Base58 alphabet (no 0, O, I, l), typical Solana address length
PUBLIC_KEY_PATTERN = re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}")

# Prefix match only: trailing characters after a valid 4-200 char
# base64 prefix are accepted, as existing clients rely on it.
SIGNED_MESSAGE_PATTERN = re.compile(r"[A-Za-z0-9+/=]{4,200}")


class AuthRequestValidator:
    """
    Validate AuthRequest shape.

    Business rules:
    - Signed message starts with 4-200 base64 characters
    - Public key, governance id and realm key are base58, 32-44 chars
    """

    def validate(self, request: AuthRequest) -> bool:
        """Return True if every rule holds."""
        return not self.errors(request)

    def errors(self, request: AuthRequest) -> List[Tuple[str, str]]:
        """
        Collect rule violations.

        Args:
            request: Incoming request

        Returns:
            List of (field, reason) pairs, empty when valid
        """
        problems = []

        if not _matches_prefix(SIGNED_MESSAGE_PATTERN, request.signed_message):
            problems.append(("message", "must start with 4-200 base64 characters"))

        key_fields = (
            ("pubKey", request.public_key),
            ("realm.governanceId", request.realm.governance_id),
            ("realm.pubKey", request.realm.pub_key),
        )
        for field, value in key_fields:
            if not _matches_fully(PUBLIC_KEY_PATTERN, value):
                problems.append((field, "must be a base58 key of 32-44 characters"))

        return problems


def _matches_prefix(pattern: re.Pattern, value: object) -> bool:
    return isinstance(value, str) and pattern.match(value) is not None


def _matches_fully(pattern: re.Pattern, value: object) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None
