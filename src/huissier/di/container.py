"""
Dependency Injection Container for Huissier.

Owns collaborator clients and builds use cases. One container is created
per application by the entry point and stored on app.state.
"""

from typing import Optional

from huissier.application.use_cases.authenticate_realm_member import (
    AuthenticateRealmMember,
)
from huissier.application.use_cases.provision_chat_member import (
    ProvisionChatMember,
)
from huissier.application.use_cases.resolve_realm_membership import (
    ResolveRealmMembership,
)
from huissier.application.validators.auth_request_validator import (
    AuthRequestValidator,
)
from huissier.config.settings import Settings
from huissier.domain.exceptions import ChatBackendError
from huissier.domain.services.i_chat_backend import IChatBackend
from huissier.domain.services.i_governance_ledger import IGovernanceLedger
from huissier.domain.services.i_signature_verifier import ISignatureVerifier
from huissier.infrastructure.auth.solana_message_verifier import (
    SolanaMessageVerifier,
)
from huissier.infrastructure.chat.stream_chat_client import StreamChatClient
from huissier.infrastructure.governance.spl_governance_client import (
    SplGovernanceClient,
)
from huissier.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Collaborators are created lazily from settings unless injected
    explicitly (tests pass fakes).
    """

    def __init__(
        self,
        settings: Settings,
        governance_ledger: Optional[IGovernanceLedger] = None,
        chat_backend: Optional[IChatBackend] = None,
        signature_verifier: Optional[ISignatureVerifier] = None,
    ):
        """
        Initialize container.

        Args:
            settings: Application settings
            governance_ledger: Optional ledger client override
            chat_backend: Optional chat backend override
            signature_verifier: Optional verifier override
        """
        self.settings = settings
        self._governance_ledger = governance_ledger
        self._chat_backend = chat_backend
        self._signature_verifier = signature_verifier

    async def initialize(self) -> None:
        """Prepare collaborators that need startup calls."""
        if self.settings.CHAT_MULTI_TENANT_ENABLED:
            try:
                await self.chat_backend.enable_multi_tenancy()
                logger.info("Chat multi-tenancy enabled")
            except ChatBackendError as e:
                # Teams are still written; the backend just won't isolate them
                logger.warning(f"Could not enable chat multi-tenancy: {e.message}")

    async def shutdown(self) -> None:
        """Close collaborator connections."""
        if self._governance_ledger:
            await self._governance_ledger.close()

        if self._chat_backend:
            await self._chat_backend.close()

    # Collaborators

    @property
    def governance_ledger(self) -> IGovernanceLedger:
        """Get governance ledger client."""
        if self._governance_ledger is None:
            self._governance_ledger = SplGovernanceClient(
                rpc_url=self.settings.SOLANA_RPC_URL,
                commitment=self.settings.SOLANA_COMMITMENT,
                total_timeout=self.settings.LEDGER_TIMEOUT,
                connect_timeout=self.settings.LEDGER_CONNECT_TIMEOUT,
            )
        return self._governance_ledger

    @property
    def chat_backend(self) -> IChatBackend:
        """Get chat backend client."""
        if self._chat_backend is None:
            self._chat_backend = StreamChatClient(
                api_key=self.settings.STREAM_API_KEY,
                api_secret=self.settings.STREAM_API_SECRET,
                base_url=self.settings.STREAM_BASE_URL,
                total_timeout=self.settings.CHAT_TIMEOUT,
                connect_timeout=self.settings.CHAT_CONNECT_TIMEOUT,
            )
        return self._chat_backend

    @property
    def signature_verifier(self) -> ISignatureVerifier:
        """Get signature verifier."""
        if self._signature_verifier is None:
            self._signature_verifier = SolanaMessageVerifier(
                auth_message=self.settings.AUTH_MESSAGE
            )
        return self._signature_verifier

    # Use cases

    def get_authenticate_realm_member(self) -> AuthenticateRealmMember:
        """Build AuthenticateRealmMember use case."""
        return AuthenticateRealmMember(
            validator=AuthRequestValidator(),
            signature_verifier=self.signature_verifier,
            resolve_membership=ResolveRealmMembership(
                governance_ledger=self.governance_ledger
            ),
            provision_member=ProvisionChatMember(chat_backend=self.chat_backend),
            chat_backend=self.chat_backend,
            provisioning_failure_policy=self.settings.PROVISIONING_FAILURE_POLICY,
        )
