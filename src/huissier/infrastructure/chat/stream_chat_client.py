"""
Stream Chat backend client.

REST client for the Stream Chat server-side API. Server requests are
authenticated with an HS256 JWT signed by the API secret; user session
tokens are minted the same way.
"""

import asyncio
import json
import time
from typing import Any, List, Optional, Sequence

import aiohttp
from jose import jwt

from huissier.domain.entities.chat import ChatChannel, ChatIdentity
from huissier.domain.exceptions.chat import ChatBackendError
from huissier.domain.services.i_chat_backend import IChatBackend
from huissier.infrastructure.monitoring.metrics import (
    chat_request_duration_seconds,
    chat_requests_total,
)

DEFAULT_BASE_URL = "https://chat.stream-io-api.com"
TEAM_CHANNEL_TYPE = "team"


class StreamChatClient(IChatBackend):
    """
    Stream Chat server client.

    Teams map to realms and channels of type "team" carry the realm in
    their "team" field. Default channel ids are derived from the realm
    and channel name, so creating the same channel twice resolves to
    one backend channel.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        total_timeout: float = 10.0,
        connect_timeout: float = 3.0,
    ):
        """
        Initialize Stream Chat client.

        Args:
            api_key: Stream application key
            api_secret: Stream application secret
            base_url: Stream API base URL
            total_timeout: Total request timeout in seconds
            connect_timeout: Connection timeout in seconds
        """
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self._session: Optional[aiohttp.ClientSession] = None
        self._server_token = jwt.encode(
            {"server": True}, self.api_secret, algorithm="HS256"
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers={
                    "Authorization": self._server_token,
                    "stream-auth-type": "jwt",
                    "X-Stream-Client": "huissier",
                },
                connector=aiohttp.TCPConnector(
                    limit=50,
                    limit_per_host=20,
                    ttl_dns_cache=300,
                ),
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    # ================================================================
    # Users
    # ================================================================

    async def get_user(self, user_id: str) -> Optional[ChatIdentity]:
        """Look up a user by id."""
        query = {"filter_conditions": {"id": {"$in": [user_id]}}}
        data = await self._request(
            "GET",
            "users",
            operation="get_user",
            params={"payload": json.dumps(query)},
        )
        users = data.get("users") or []
        if not users:
            return None
        return self._parse_user(users[0])

    async def create_user(self, user_id: str) -> ChatIdentity:
        """Create (upsert) a user with no custom data."""
        data = await self._request(
            "POST",
            "users",
            operation="create_user",
            body={"users": {user_id: {"id": user_id}}},
        )
        user = (data.get("users") or {}).get(user_id)
        if user is None:
            raise ChatBackendError(
                f"Upsert response missing user {user_id}",
                operation="create_user",
            )
        return self._parse_user(user)

    async def update_user_teams(self, user_id: str, teams: Sequence[str]) -> None:
        """Set the user's teams, leaving other fields untouched."""
        await self._request(
            "PATCH",
            "users",
            operation="update_user_teams",
            body={"users": [{"id": user_id, "set": {"teams": list(teams)}}]},
        )

    async def mint_token(self, user_id: str) -> str:
        """Create a user session token."""
        return jwt.encode({"user_id": user_id}, self.api_secret, algorithm="HS256")

    # ================================================================
    # Channels
    # ================================================================

    async def list_channels(self, team: str) -> List[ChatChannel]:
        """Query channels of a team."""
        data = await self._request(
            "POST",
            "channels",
            operation="list_channels",
            body={
                "filter_conditions": {"team": team},
                "sort": [],
                "state": True,
                "watch": False,
                "presence": False,
            },
        )
        return [self._parse_channel(entry) for entry in data.get("channels") or []]

    async def add_channel_member(self, channel: ChatChannel, user_id: str) -> None:
        """Add a member to a channel."""
        await self._request(
            "POST",
            f"channels/{channel.channel_type}/{channel.channel_id}",
            operation="add_channel_member",
            body={"add_members": [user_id]},
        )

    async def create_channel(
        self,
        team: str,
        name: str,
        members: Sequence[str],
        creator: str,
    ) -> ChatChannel:
        """Get-or-create a team channel with initial members."""
        channel_id = f"{team}{name.lower()}"
        data = await self._request(
            "POST",
            f"channels/{TEAM_CHANNEL_TYPE}/{channel_id}/query",
            operation="create_channel",
            body={
                "data": {
                    "name": name,
                    "team": team,
                    "members": list(members),
                    "created_by": {"id": creator},
                },
                "state": True,
                "watch": False,
                "presence": False,
            },
        )
        return self._parse_channel(data)

    # ================================================================
    # App settings
    # ================================================================

    async def enable_multi_tenancy(self) -> None:
        """Enable multi-tenant mode so team fields are enforced."""
        await self._request(
            "PATCH",
            "app",
            operation="enable_multi_tenancy",
            body={"multi_tenant_enabled": True},
        )

    # ================================================================
    # Transport
    # ================================================================

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        params: Optional[dict] = None,
        body: Optional[dict] = None,
    ) -> dict:
        """
        Make one API request.

        Returns:
            Decoded JSON body

        Raises:
            ChatBackendError: On transport error, timeout or non-2xx status
        """
        url = f"{self.base_url}/{path}"
        query = {"api_key": self.api_key, **(params or {})}

        start_time = time.time()
        status = "error"
        try:
            session = await self._get_session()
            async with session.request(
                method, url, params=query, json=body
            ) as response:
                try:
                    data = await response.json(content_type=None)
                except ValueError:
                    # Gateway error pages are not JSON
                    if response.status < 400:
                        raise
                    data = None
                if response.status >= 400:
                    detail = data.get("message") if isinstance(data, dict) else None
                    raise ChatBackendError(
                        f"{operation} failed: {detail or response.status}",
                        status_code=response.status,
                        operation=operation,
                    )

            if not isinstance(data, dict):
                raise ChatBackendError(
                    f"{operation} returned malformed body", operation=operation
                )

            status = "success"
            return data

        except asyncio.TimeoutError:
            raise ChatBackendError(f"{operation} timed out", operation=operation)
        except aiohttp.ClientError as e:
            raise ChatBackendError(
                f"{operation} transport error: {e}", operation=operation
            )
        except ValueError as e:
            raise ChatBackendError(
                f"{operation} returned invalid JSON: {e}", operation=operation
            )
        finally:
            chat_requests_total.labels(operation=operation, status=status).inc()
            chat_request_duration_seconds.labels(operation=operation).observe(
                time.time() - start_time
            )

    # ================================================================
    # Payload parsing
    # ================================================================

    def _parse_user(self, payload: Any) -> ChatIdentity:
        if not isinstance(payload, dict) or not payload.get("id"):
            raise ChatBackendError("Malformed user payload", operation="parse_user")
        teams = payload.get("teams") or []
        if not isinstance(teams, list):
            raise ChatBackendError("Malformed user teams", operation="parse_user")
        return ChatIdentity(id=payload["id"], teams=tuple(teams))

    def _parse_channel(self, payload: Any) -> ChatChannel:
        channel = payload.get("channel") if isinstance(payload, dict) else None
        if not isinstance(channel, dict) or not channel.get("id"):
            raise ChatBackendError(
                "Malformed channel payload", operation="parse_channel"
            )
        members = frozenset(
            member.get("user_id") or (member.get("user") or {}).get("id")
            for member in payload.get("members") or []
            if isinstance(member, dict)
        )
        return ChatChannel(
            channel_type=channel.get("type", TEAM_CHANNEL_TYPE),
            channel_id=channel["id"],
            name=channel.get("name", ""),
            team=channel.get("team", ""),
            members=members - {None},
        )
