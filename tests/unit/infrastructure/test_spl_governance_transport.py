"""
Transport tests for SplGovernanceClient.

Drives JSON-RPC calls against a local aiohttp server: HTTP status,
RPC error members, bad bodies and timeouts must all surface as
LedgerError and be counted as errors.

Usage:
    pytest tests/unit/infrastructure/test_spl_governance_transport.py
"""

import pytest
from prometheus_client import REGISTRY

from huissier.domain.exceptions.ledger import LedgerError
from huissier.infrastructure.governance.spl_governance_client import (
    SplGovernanceClient,
)
from tests.helpers.wallets import new_address

METHOD = "getProgramAccounts"


def _requests(status: str, method: str = METHOD) -> float:
    value = REGISTRY.get_sample_value(
        "huissier_ledger_requests_total", {"method": method, "status": status}
    )
    return value or 0.0


@pytest.fixture
async def client(scripted_server):
    client = SplGovernanceClient(
        rpc_url=scripted_server.url("/"),
        total_timeout=0.5,
        connect_timeout=0.5,
    )
    yield client
    await client.close()


class TestSplGovernanceTransport:
    """JSON-RPC transport tests against a local server."""

    async def test_request_payload(self, client, scripted_server):
        """Test JSON-RPC envelope and success metric."""
        before = _requests("success")
        scripted_server.reply(payload={"jsonrpc": "2.0", "id": 1, "result": []})

        result = await client._rpc(METHOD, [new_address(), {"encoding": "base64"}])

        assert result == []
        request = scripted_server.requests[0]
        assert request.method == "POST"
        assert request.body["jsonrpc"] == "2.0"
        assert request.body["method"] == METHOD
        assert request.body["params"][1] == {"encoding": "base64"}
        assert _requests("success") == before + 1

    async def test_request_ids_increase(self, client, scripted_server):
        """Test each call gets a fresh request id."""
        scripted_server.reply(payload={"result": []})
        scripted_server.reply(payload={"result": []})

        await client._rpc(METHOD, [])
        await client._rpc(METHOD, [])

        ids = [request.body["id"] for request in scripted_server.requests]
        assert ids == [1, 2]

    async def test_http_error_status(self, client, scripted_server):
        """Test 5xx maps to LedgerError."""
        before = _requests("error")
        scripted_server.reply(status=503, text="upstream unavailable")

        with pytest.raises(LedgerError) as exc_info:
            await client._rpc(METHOD, [])

        assert "503" in exc_info.value.message
        assert exc_info.value.method == METHOD
        assert _requests("error") == before + 1

    async def test_rpc_error_object(self, client, scripted_server):
        """Test JSON-RPC error member maps to LedgerError with its message."""
        before = _requests("error")
        scripted_server.reply(
            payload={
                "jsonrpc": "2.0",
                "id": 1,
                "error": {"code": -32005, "message": "Node is behind"},
            }
        )

        with pytest.raises(LedgerError) as exc_info:
            await client._rpc(METHOD, [])

        assert "Node is behind" in exc_info.value.message
        assert _requests("error") == before + 1

    async def test_rpc_error_string(self, client, scripted_server):
        """Test plain string error member maps to LedgerError."""
        scripted_server.reply(
            payload={"jsonrpc": "2.0", "id": 1, "error": "Too many requests"}
        )

        with pytest.raises(LedgerError) as exc_info:
            await client._rpc(METHOD, [])

        assert "Too many requests" in exc_info.value.message

    async def test_non_json_body(self, client, scripted_server):
        """Test unparseable body maps to LedgerError."""
        before = _requests("error")
        scripted_server.reply(text="<html>gateway</html>")

        with pytest.raises(LedgerError):
            await client._rpc(METHOD, [])

        assert _requests("error") == before + 1

    async def test_non_object_body(self, client, scripted_server):
        """Test JSON body that is not an object maps to LedgerError."""
        scripted_server.reply(payload=["not", "an", "envelope"])

        with pytest.raises(LedgerError):
            await client._rpc(METHOD, [])

    async def test_timeout(self, client, scripted_server):
        """Test slow node is cut off by the client timeout."""
        before = _requests("error")
        scripted_server.reply(payload={"result": []}, delay=1.5)

        with pytest.raises(LedgerError) as exc_info:
            await client._rpc(METHOD, [])

        assert "timeout" in exc_info.value.message
        assert _requests("error") == before + 1

    async def test_connection_refused(self, scripted_server):
        """Test unreachable node maps to LedgerError."""
        url = scripted_server.url("/")
        await scripted_server.close()
        client = SplGovernanceClient(rpc_url=url, total_timeout=1.0)

        try:
            with pytest.raises(LedgerError):
                await client._rpc(METHOD, [])
        finally:
            await client.close()

    async def test_string_error_in_records_query(self, client, scripted_server):
        """Test records query fails with LedgerError on a rate-limit reply."""
        scripted_server.reply(payload={"error": "Too many requests"})

        with pytest.raises(LedgerError):
            await client.get_membership_records(new_address(), new_address())
