"""
AuthRequest entity - a wallet's request to join a realm's chat.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RealmRef:
    """Realm addressed by a request: governance program id + realm account."""

    governance_id: str
    pub_key: str


@dataclass(frozen=True)
class AuthRequest:
    """
    Authentication request as received from a client.

    Fields are kept as raw strings; shape checks happen in
    AuthRequestValidator before anything touches the network.
    """

    public_key: str
    signed_message: str
    realm: RealmRef

    def to_log_context(self) -> dict:
        """Loggable summary (never includes the signed message)."""
        return {
            "public_key": self.public_key,
            "realm": self.realm.pub_key,
            "governance_id": self.realm.governance_id,
        }
