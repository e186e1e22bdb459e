"""
Provision Chat Member use case.

Brings a verified realm member's chat state in line with the ledger:
identity, team membership and default channels.
"""

from typing import Optional

from huissier.application.dto.provisioning_report import ProvisioningReport
from huissier.domain.entities.chat import (
    COMMUNITY_CHANNEL,
    COUNCIL_CHANNEL,
    ChatChannel,
    ChatIdentity,
)
from huissier.domain.exceptions import ChatBackendError
from huissier.domain.services.i_chat_backend import IChatBackend
from huissier.domain.value_objects.call_result import CallResult, capture
from huissier.infrastructure.monitoring import get_logger
from huissier.infrastructure.monitoring.metrics import (
    channels_created_total,
    provisioning_failures_total,
)

logger = get_logger(__name__)


class ProvisionChatMember:
    """
    Idempotent, best-effort chat provisioning.

    Business rules:
    - Identity is looked up, then created if absent
    - Realm is appended to the identity's teams only if missing
    - Member joins existing Community (and Council, if eligible) channels
    - Missing default channels are created with member + realm as members
    - Each backend call is guarded; a failure never aborts the pass

    Known limitation: lookup-then-create is not atomic, so concurrent
    first logins may race. A later pass reconciles membership.
    """

    def __init__(self, chat_backend: IChatBackend):
        """
        Initialize use case with dependencies.

        Args:
            chat_backend: Chat backend client
        """
        self.chat_backend = chat_backend

    async def execute(
        self,
        public_key: str,
        realm_pub_key: str,
        has_council_token: bool,
    ) -> ProvisioningReport:
        """
        Execute chat provisioning.

        Args:
            public_key: Member wallet (chat user id)
            realm_pub_key: Realm (chat team)
            has_council_token: Council tier eligibility

        Returns:
            ProvisioningReport describing every step
        """
        report = ProvisioningReport(public_key=public_key, team=realm_pub_key)

        # 1. Ensure identity
        identity = await self._ensure_identity(public_key, report)
        if identity is None:
            report.skip("update_user_teams")
            report.skip("channels")
            self._log_failures(report)
            return report

        # 2. Ensure team membership
        await self._ensure_team(identity, realm_pub_key, report)

        # 3-5. Ensure default channels
        await self._ensure_channels(
            public_key, realm_pub_key, has_council_token, report
        )

        self._log_failures(report)
        return report

    # ================================================================
    # Steps
    # ================================================================

    async def _ensure_identity(
        self, public_key: str, report: ProvisioningReport
    ) -> Optional[ChatIdentity]:
        lookup = report.record(
            await self._call("get_user", self.chat_backend.get_user(public_key))
        )
        if not lookup.ok:
            return None
        if lookup.value is not None:
            return lookup.value

        created = report.record(
            await self._call("create_user", self.chat_backend.create_user(public_key))
        )
        if not created.ok:
            return None

        report.identity_created = True
        logger.info(f"Created chat identity for {public_key}")
        return created.value

    async def _ensure_team(
        self,
        identity: ChatIdentity,
        realm_pub_key: str,
        report: ProvisioningReport,
    ) -> None:
        if identity.in_team(realm_pub_key):
            return

        updated = identity.with_team(realm_pub_key)
        result = report.record(
            await self._call(
                "update_user_teams",
                self.chat_backend.update_user_teams(identity.id, list(updated.teams)),
            )
        )
        if result.ok:
            report.team_added = True

    async def _ensure_channels(
        self,
        public_key: str,
        realm_pub_key: str,
        has_council_token: bool,
        report: ProvisioningReport,
    ) -> None:
        listing = report.record(
            await self._call(
                "list_channels", self.chat_backend.list_channels(realm_pub_key)
            )
        )
        if not listing.ok:
            # Channel state unknown; creating now could duplicate
            report.skip("channels")
            return

        satisfied = {COMMUNITY_CHANNEL: False, COUNCIL_CHANNEL: False}

        for channel in listing.value:
            if channel.name == COMMUNITY_CHANNEL:
                await self._join(channel, public_key, report)
                satisfied[COMMUNITY_CHANNEL] = True
            elif channel.name == COUNCIL_CHANNEL and has_council_token:
                await self._join(channel, public_key, report)
                satisfied[COUNCIL_CHANNEL] = True

        if not satisfied[COMMUNITY_CHANNEL]:
            await self._create(COMMUNITY_CHANNEL, public_key, realm_pub_key, report)

        if not satisfied[COUNCIL_CHANNEL] and has_council_token:
            await self._create(COUNCIL_CHANNEL, public_key, realm_pub_key, report)

    async def _join(
        self, channel: ChatChannel, public_key: str, report: ProvisioningReport
    ) -> None:
        if channel.has_member(public_key):
            return
        report.record(
            await self._call(
                f"add_channel_member:{channel.name}",
                self.chat_backend.add_channel_member(channel, public_key),
            )
        )

    async def _create(
        self,
        name: str,
        public_key: str,
        realm_pub_key: str,
        report: ProvisioningReport,
    ) -> None:
        logger.info(f"Creating {name} channel for {realm_pub_key}.")
        result = report.record(
            await self._call(
                f"create_channel:{name}",
                self.chat_backend.create_channel(
                    team=realm_pub_key,
                    name=name,
                    members=[public_key, realm_pub_key],
                    creator=realm_pub_key,
                ),
            )
        )
        if result.ok:
            report.channels_created.append(name)
            channels_created_total.labels(name=name).inc()

    # ================================================================
    # Helpers
    # ================================================================

    async def _call(self, operation: str, awaitable) -> CallResult:
        return await capture(operation, awaitable, errors=(ChatBackendError,))

    def _log_failures(self, report: ProvisioningReport) -> None:
        for step in report.steps:
            if step.ok:
                continue
            provisioning_failures_total.labels(step=step.operation).inc()
            logger.error(
                f"Provisioning step {step.operation} failed for "
                f"{report.public_key} in {report.team}: {step.error.message}",
                extra={
                    "step": step.operation,
                    "public_key": report.public_key,
                    "team": report.team,
                },
            )
