"""
Test fixtures and configuration.
"""

import pytest

from huissier.config.settings import Settings
from huissier.domain.entities.auth_request import AuthRequest, RealmRef
from huissier.infrastructure.auth.solana_message_verifier import (
    SolanaMessageVerifier,
)
from tests.helpers.fakes import InMemoryChatBackend, InMemoryGovernanceLedger
from tests.helpers.http_server import ScriptedServer
from tests.helpers.wallets import (
    AUTH_MESSAGE,
    new_address,
    new_wallet,
    sign_open,
    wallet_address,
)


@pytest.fixture
def settings() -> Settings:
    """Settings with test credentials (no YAML, no .env)."""
    return Settings(
        _env_file=None,
        ENV="test",
        SOLANA_RPC_URL="http://localhost:8899",
        STREAM_API_KEY="test-key",
        STREAM_API_SECRET="test-secret",
        AUTH_MESSAGE=AUTH_MESSAGE,
        CHAT_MULTI_TENANT_ENABLED=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def alice():
    """Alice's signing key."""
    return new_wallet()


@pytest.fixture
def alice_address(alice) -> str:
    """Alice's wallet address."""
    return wallet_address(alice)


@pytest.fixture
def realm() -> RealmRef:
    """Realm reference with random addresses."""
    return RealmRef(governance_id=new_address(), pub_key=new_address())


@pytest.fixture
def alice_request(alice, alice_address, realm) -> AuthRequest:
    """Valid, correctly signed request from Alice."""
    return AuthRequest(
        public_key=alice_address,
        signed_message=sign_open(alice),
        realm=realm,
    )


@pytest.fixture
def verifier() -> SolanaMessageVerifier:
    """Verifier bound to the test challenge."""
    return SolanaMessageVerifier(auth_message=AUTH_MESSAGE)


@pytest.fixture
def chat_backend() -> InMemoryChatBackend:
    """Empty in-memory chat backend."""
    return InMemoryChatBackend()


@pytest.fixture
def ledger() -> InMemoryGovernanceLedger:
    """Empty in-memory governance ledger."""
    return InMemoryGovernanceLedger()


@pytest.fixture
async def scripted_server():
    """Local HTTP server replying with queued responses."""
    server = ScriptedServer()
    await server.start()
    yield server
    await server.close()
