"""
Chat entities - user identities and team channels in the chat backend.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

COMMUNITY_CHANNEL = "Community"
COUNCIL_CHANNEL = "Council"


@dataclass(frozen=True)
class ChatIdentity:
    """
    Chat user keyed by wallet public key.

    teams holds the realms (teams) the user belongs to, in backend order.
    """

    id: str
    teams: Tuple[str, ...] = ()

    def in_team(self, team: str) -> bool:
        """Check team membership."""
        return team in self.teams

    def with_team(self, team: str) -> "ChatIdentity":
        """Return a copy with team appended (no-op if already present)."""
        if self.in_team(team):
            return self
        return ChatIdentity(id=self.id, teams=self.teams + (team,))


@dataclass(frozen=True)
class ChatChannel:
    """Channel scoped to a team (realm)."""

    channel_type: str
    channel_id: str
    name: str
    team: str
    members: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def cid(self) -> str:
        """Backend channel identifier ("type:id")."""
        return f"{self.channel_type}:{self.channel_id}"

    def has_member(self, user_id: str) -> bool:
        """Check channel membership."""
        return user_id in self.members
