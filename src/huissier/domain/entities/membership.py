"""
Governance membership entities - snapshots of ledger state.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RealmConfig:
    """
    Realm metadata as read from the governance ledger.

    A realm without a council mint has no council tier.
    """

    address: str
    community_mint: str
    council_mint: Optional[str] = None
    name: str = ""


@dataclass(frozen=True)
class MembershipRecord:
    """
    Token owner record for one (realm, owner, mint) triple.

    Immutable snapshot fetched per request; never cached.
    """

    governing_token_owner: str
    governing_token_mint: str
    governing_token_deposit_amount: int
    governance_delegate: Optional[str] = None
    address: str = ""
    realm: str = ""

    def __post_init__(self):
        """Validate record data."""
        if self.governing_token_deposit_amount < 0:
            raise ValueError(
                "Deposit amount cannot be negative: "
                f"{self.governing_token_deposit_amount}"
            )

    def references(self, public_key: str) -> bool:
        """True if public_key is the owner or the delegate of this record."""
        return (
            self.governing_token_owner == public_key
            or self.governance_delegate == public_key
        )

    def holds_council_token(self, council_mint: Optional[str]) -> bool:
        """True if this record is a nonzero deposit of the council mint."""
        if council_mint is None:
            return False
        return (
            self.governing_token_mint == council_mint
            and self.governing_token_deposit_amount > 0
        )


@dataclass(frozen=True)
class MembershipResolution:
    """Outcome of resolving a requester against a realm's records."""

    authorized: bool
    has_council_token: bool = False

    @classmethod
    def denied(cls) -> "MembershipResolution":
        """Resolution for a requester found in no record."""
        return cls(authorized=False, has_council_token=False)
