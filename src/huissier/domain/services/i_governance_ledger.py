"""
Governance ledger service interface.
"""

from abc import ABC, abstractmethod
from typing import List

from huissier.domain.entities.membership import MembershipRecord, RealmConfig


class IGovernanceLedger(ABC):
    """
    Abstract read-only interface to the governance ledger.

    Implementations raise LedgerError on transport failures, timeouts
    and malformed responses.
    """

    @abstractmethod
    async def get_realm_config(self, realm_pub_key: str) -> RealmConfig:
        """
        Fetch realm configuration.

        Args:
            realm_pub_key: Realm account address (base58)

        Returns:
            RealmConfig with optional council mint
        """

    @abstractmethod
    async def get_membership_records(
        self,
        governance_id: str,
        realm_pub_key: str,
    ) -> List[MembershipRecord]:
        """
        Fetch all token owner records of a realm, in ledger order.

        Args:
            governance_id: Governance program id (base58)
            realm_pub_key: Realm account address (base58)

        Returns:
            List of MembershipRecord snapshots
        """

    async def close(self) -> None:
        """Release transport resources."""
