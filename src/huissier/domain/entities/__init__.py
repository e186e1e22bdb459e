"""
Domain entities package.
"""

from huissier.domain.entities.auth_request import AuthRequest, RealmRef
from huissier.domain.entities.chat import (
    COMMUNITY_CHANNEL,
    COUNCIL_CHANNEL,
    ChatChannel,
    ChatIdentity,
)
from huissier.domain.entities.membership import (
    MembershipRecord,
    MembershipResolution,
    RealmConfig,
)

__all__ = [
    "AuthRequest",
    "RealmRef",
    "ChatIdentity",
    "ChatChannel",
    "COMMUNITY_CHANNEL",
    "COUNCIL_CHANNEL",
    "MembershipRecord",
    "MembershipResolution",
    "RealmConfig",
]
