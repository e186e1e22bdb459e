"""
Governance ledger adapters.
"""

from huissier.infrastructure.governance.spl_governance_client import (
    SplGovernanceClient,
)

__all__ = ["SplGovernanceClient"]
