"""
Transport tests for StreamChatClient.

Runs requests against a local aiohttp server to cover authentication
headers, status mapping, bad bodies and timeouts.

Usage:
    pytest tests/unit/infrastructure/test_stream_chat_transport.py
"""

import json

import pytest
from jose import jwt
from prometheus_client import REGISTRY

from huissier.domain.exceptions.chat import ChatBackendError
from huissier.infrastructure.chat.stream_chat_client import StreamChatClient

API_KEY = "stream-key"
API_SECRET = "stream-secret"


def _requests(operation: str, status: str) -> float:
    value = REGISTRY.get_sample_value(
        "huissier_chat_requests_total", {"operation": operation, "status": status}
    )
    return value or 0.0


@pytest.fixture
async def client(scripted_server):
    client = StreamChatClient(
        api_key=API_KEY,
        api_secret=API_SECRET,
        base_url=scripted_server.url("/"),
        total_timeout=0.5,
        connect_timeout=0.5,
    )
    yield client
    await client.close()


class TestStreamChatTransport:
    """HTTP transport tests against a local server."""

    async def test_server_auth_and_query(self, client, scripted_server):
        """Test requests carry the API key and a server JWT."""
        before = _requests("get_user", "success")
        scripted_server.reply(payload={"users": [{"id": "wallet-1"}]})

        identity = await client.get_user("wallet-1")

        assert identity.id == "wallet-1"
        request = scripted_server.requests[0]
        assert request.method == "GET"
        assert request.path == "/users"
        assert request.query["api_key"] == API_KEY
        assert json.loads(request.query["payload"]) == {
            "filter_conditions": {"id": {"$in": ["wallet-1"]}}
        }
        assert request.headers["stream-auth-type"] == "jwt"
        claims = jwt.decode(
            request.headers["Authorization"], API_SECRET, algorithms=["HS256"]
        )
        assert claims == {"server": True}
        assert _requests("get_user", "success") == before + 1

    async def test_json_body_sent(self, client, scripted_server):
        """Test write requests send their JSON body."""
        scripted_server.reply(payload={})

        await client.update_user_teams("wallet-1", ["realm-a"])

        request = scripted_server.requests[0]
        assert request.method == "PATCH"
        assert request.body == {
            "users": [{"id": "wallet-1", "set": {"teams": ["realm-a"]}}]
        }

    async def test_server_error_status(self, client, scripted_server):
        """Test 5xx maps to ChatBackendError with status and message."""
        before = _requests("list_channels", "error")
        scripted_server.reply(status=500, payload={"code": -1, "message": "boom"})

        with pytest.raises(ChatBackendError) as exc_info:
            await client.list_channels("realm-a")

        assert exc_info.value.status_code == 500
        assert exc_info.value.operation == "list_channels"
        assert "boom" in exc_info.value.message
        assert _requests("list_channels", "error") == before + 1

    async def test_gateway_error_page(self, client, scripted_server):
        """Test non-JSON error page keeps the HTTP status."""
        scripted_server.reply(status=502, text="<html>Bad Gateway</html>")

        with pytest.raises(ChatBackendError) as exc_info:
            await client.list_channels("realm-a")

        assert exc_info.value.status_code == 502

    async def test_non_json_success_body(self, client, scripted_server):
        """Test unparseable 200 body maps to ChatBackendError."""
        before = _requests("get_user", "error")
        scripted_server.reply(text="not json")

        with pytest.raises(ChatBackendError) as exc_info:
            await client.get_user("wallet-1")

        assert exc_info.value.status_code is None
        assert _requests("get_user", "error") == before + 1

    async def test_non_object_body(self, client, scripted_server):
        """Test JSON array body maps to ChatBackendError."""
        scripted_server.reply(payload=[1, 2, 3])

        with pytest.raises(ChatBackendError):
            await client.get_user("wallet-1")

    async def test_timeout(self, client, scripted_server):
        """Test slow backend is cut off by the client timeout."""
        before = _requests("enable_multi_tenancy", "error")
        scripted_server.reply(payload={}, delay=1.5)

        with pytest.raises(ChatBackendError) as exc_info:
            await client.enable_multi_tenancy()

        assert "timed out" in exc_info.value.message
        assert _requests("enable_multi_tenancy", "error") == before + 1

    async def test_connection_refused(self, scripted_server):
        """Test unreachable backend maps to ChatBackendError."""
        url = scripted_server.url("/")
        await scripted_server.close()
        client = StreamChatClient(API_KEY, API_SECRET, base_url=url, total_timeout=1.0)

        try:
            with pytest.raises(ChatBackendError):
                await client.get_user("wallet-1")
        finally:
            await client.close()
