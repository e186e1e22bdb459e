"""
Chat backend service interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from huissier.domain.entities.chat import ChatChannel, ChatIdentity


class IChatBackend(ABC):
    """
    Abstract interface to the chat backend.

    The backend offers no transactions: every method is a single remote
    read or write. Implementations raise ChatBackendError on failure.
    """

    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[ChatIdentity]:
        """Look up a chat identity, None if absent."""

    @abstractmethod
    async def create_user(self, user_id: str) -> ChatIdentity:
        """Create a chat identity."""

    @abstractmethod
    async def update_user_teams(self, user_id: str, teams: Sequence[str]) -> None:
        """Persist the full team set of a user."""

    @abstractmethod
    async def list_channels(self, team: str) -> List[ChatChannel]:
        """List channels scoped to a team."""

    @abstractmethod
    async def add_channel_member(self, channel: ChatChannel, user_id: str) -> None:
        """Add a member to a channel (no-op if already a member)."""

    @abstractmethod
    async def create_channel(
        self,
        team: str,
        name: str,
        members: Sequence[str],
        creator: str,
    ) -> ChatChannel:
        """Create a team channel with initial members."""

    @abstractmethod
    async def mint_token(self, user_id: str) -> str:
        """Mint a session token for a user."""

    async def enable_multi_tenancy(self) -> None:
        """Turn on team isolation in the backend (optional)."""

    async def close(self) -> None:
        """Release transport resources."""
