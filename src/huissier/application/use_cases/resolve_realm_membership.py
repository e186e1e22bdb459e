"""
Resolve Realm Membership use case.

Decides whether a wallet may join a realm's chat, and at which tier.
"""

from typing import Optional

from huissier.domain.entities.membership import MembershipResolution, RealmConfig
from huissier.domain.exceptions import LedgerError
from huissier.domain.services.i_governance_ledger import IGovernanceLedger
from huissier.domain.value_objects.call_result import CallResult, capture
from huissier.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class ResolveRealmMembership:
    """
    Resolve a requester against a realm's token owner records.

    Business rules:
    - Requester matches a record as owner OR as delegate
    - First matching record (ledger order) decides; no aggregation
    - Council tier requires the council mint AND a nonzero deposit
    - Realm config failure degrades to "no council mint"
    - Record fetch failure propagates as LedgerError
    """

    def __init__(self, governance_ledger: IGovernanceLedger):
        """
        Initialize use case with dependencies.

        Args:
            governance_ledger: Read-only governance ledger client
        """
        self.governance_ledger = governance_ledger

    async def execute(
        self,
        realm_pub_key: str,
        governance_id: str,
        requester_pub_key: str,
    ) -> MembershipResolution:
        """
        Execute membership resolution.

        Args:
            realm_pub_key: Realm account address
            governance_id: Governance program id
            requester_pub_key: Wallet asking to join

        Returns:
            MembershipResolution (authorized, has_council_token)

        Raises:
            LedgerError: If membership records cannot be fetched
        """
        # 1. Realm config (non-fatal)
        realm_result = await capture(
            "get_realm_config",
            self.governance_ledger.get_realm_config(realm_pub_key),
            errors=(LedgerError,),
        )
        council_mint = self._council_mint(realm_pub_key, realm_result)

        # 2. Membership records (fatal)
        records = await self.governance_ledger.get_membership_records(
            governance_id, realm_pub_key
        )

        # 3. First match wins
        for record in records:
            if record.references(requester_pub_key):
                return MembershipResolution(
                    authorized=True,
                    has_council_token=record.holds_council_token(council_mint),
                )

        return MembershipResolution.denied()

    def _council_mint(
        self,
        realm_pub_key: str,
        realm_result: CallResult[RealmConfig],
    ) -> Optional[str]:
        if realm_result.ok:
            return realm_result.value.council_mint

        logger.warning(
            f"Realm config unavailable for {realm_pub_key}, "
            f"continuing without council tier: {realm_result.error.message}",
            extra={"realm": realm_pub_key},
        )
        return None
