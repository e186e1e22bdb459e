"""
Authenticate Realm Member use case.

Sequences validation, signature verification, membership resolution,
chat provisioning and token issuance.
"""

import time

from huissier.application.dto.provisioning_report import ProvisioningReport
from huissier.application.use_cases.provision_chat_member import (
    ProvisionChatMember,
)
from huissier.application.use_cases.resolve_realm_membership import (
    ResolveRealmMembership,
)
from huissier.application.validators.auth_request_validator import (
    AuthRequestValidator,
)
from huissier.domain.entities.auth_request import AuthRequest
from huissier.domain.entities.membership import MembershipResolution
from huissier.domain.exceptions import (
    AuthorizationDenied,
    ChatBackendError,
    LedgerError,
    ProvisioningError,
    SignatureError,
    ValidationError,
)
from huissier.domain.services.i_chat_backend import IChatBackend
from huissier.domain.services.i_signature_verifier import ISignatureVerifier
from huissier.domain.value_objects.auth_outcome import AuthOutcome, AuthState
from huissier.infrastructure.monitoring import get_logger
from huissier.infrastructure.monitoring.metrics import (
    authentication_duration_seconds,
    authentications_total,
)

logger = get_logger(__name__)

FAILURE_POLICY_LOG = "log"
FAILURE_POLICY_RAISE = "raise"
FAILURE_POLICIES = (FAILURE_POLICY_LOG, FAILURE_POLICY_RAISE)

# Outcome label for runs that end with a token minting error
TOKEN_FAILED_OUTCOME = "token_failed"


class AuthenticateRealmMember:
    """
    Authenticate a wallet as a realm member and open its chat session.

    Flow (linear, early exit on failure):
    received -> validated -> signature_verified -> authorized
    -> provisioned -> token_issued

    Business rules:
    - Validation and signature failures make no external calls
    - Ledger errors while resolving membership fail the request
    - Non-members get a negative result and no chat writes
    - Provisioning is best-effort unless the failure policy is "raise"
    """

    def __init__(
        self,
        validator: AuthRequestValidator,
        signature_verifier: ISignatureVerifier,
        resolve_membership: ResolveRealmMembership,
        provision_member: ProvisionChatMember,
        chat_backend: IChatBackend,
        provisioning_failure_policy: str = FAILURE_POLICY_LOG,
    ):
        """
        Initialize use case with dependencies.

        Args:
            validator: Request shape validator
            signature_verifier: Challenge signature verifier
            resolve_membership: Membership resolution use case
            provision_member: Chat provisioning use case
            chat_backend: Chat backend (token minting)
            provisioning_failure_policy: "log" or "raise"
        """
        if provisioning_failure_policy not in FAILURE_POLICIES:
            raise ValueError(
                f"Unknown provisioning failure policy: {provisioning_failure_policy}"
            )

        self.validator = validator
        self.signature_verifier = signature_verifier
        self.resolve_membership = resolve_membership
        self.provision_member = provision_member
        self.chat_backend = chat_backend
        self.provisioning_failure_policy = provisioning_failure_policy

    async def execute(self, request: AuthRequest) -> AuthOutcome:
        """
        Execute realm member authentication.

        Args:
            request: Incoming authentication request

        Returns:
            AuthOutcome in a terminal state

        Raises:
            ChatBackendError: If the session token cannot be minted
        """
        start_time = time.time()
        try:
            outcome = await self._run(request)
        except ChatBackendError as e:
            self._record(TOKEN_FAILED_OUTCOME, request)
            logger.error(
                f"Chat token could not be issued: {e.message}",
                extra={"operation": e.operation, **request.to_log_context()},
            )
            raise
        finally:
            authentication_duration_seconds.observe(time.time() - start_time)

        self._record(outcome.state.value, request)
        return outcome

    def _record(self, outcome: str, request: AuthRequest) -> None:
        authentications_total.labels(outcome=outcome).inc()
        logger.info(
            f"Authentication finished: {outcome}",
            extra={"outcome": outcome, **request.to_log_context()},
        )

    async def _run(self, request: AuthRequest) -> AuthOutcome:
        try:
            self._validate(request)
            self._verify_signature(request)
            resolution = await self._authorize(request)
            await self._provision(request, resolution)
        except ValidationError as e:
            logger.info(f"Rejected request: {e.message}")
            return AuthOutcome(AuthState.INVALID_INPUT)
        except SignatureError:
            return AuthOutcome(AuthState.SIGNATURE_INVALID)
        except LedgerError as e:
            logger.error(
                f"Membership resolution failed for realm {request.realm.pub_key}: "
                f"{e.message}",
                extra={"rpc_method": e.method},
            )
            return AuthOutcome(AuthState.RESOLUTION_FAILED)
        except AuthorizationDenied:
            return AuthOutcome(AuthState.UNAUTHORIZED)
        except ProvisioningError:
            return AuthOutcome(AuthState.PROVISIONING_FAILED)

        token = await self.chat_backend.mint_token(request.public_key)
        return AuthOutcome(AuthState.TOKEN_ISSUED, stream_token=token)

    # ================================================================
    # Transitions
    # ================================================================

    def _validate(self, request: AuthRequest) -> None:
        """received -> validated"""
        problems = self.validator.errors(request)
        if problems:
            field, reason = problems[0]
            raise ValidationError(field=field, reason=reason)

    def _verify_signature(self, request: AuthRequest) -> None:
        """validated -> signature_verified"""
        if not self.signature_verifier.verify(
            request.signed_message, request.public_key
        ):
            raise SignatureError(request.public_key)

    async def _authorize(self, request: AuthRequest) -> MembershipResolution:
        """signature_verified -> authorized"""
        resolution = await self.resolve_membership.execute(
            realm_pub_key=request.realm.pub_key,
            governance_id=request.realm.governance_id,
            requester_pub_key=request.public_key,
        )
        if not resolution.authorized:
            raise AuthorizationDenied(request.public_key, request.realm.pub_key)
        return resolution

    async def _provision(
        self, request: AuthRequest, resolution: MembershipResolution
    ) -> ProvisioningReport:
        """authorized -> provisioned"""
        report = await self.provision_member.execute(
            public_key=request.public_key,
            realm_pub_key=request.realm.pub_key,
            has_council_token=resolution.has_council_token,
        )
        strict = self.provisioning_failure_policy == FAILURE_POLICY_RAISE
        if strict and not report.complete:
            raise ProvisioningError(report.failed_steps or report.skipped)
        return report
