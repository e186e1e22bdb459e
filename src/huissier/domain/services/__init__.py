"""
Domain service interfaces.
"""

from huissier.domain.services.i_chat_backend import IChatBackend
from huissier.domain.services.i_governance_ledger import IGovernanceLedger
from huissier.domain.services.i_signature_verifier import ISignatureVerifier

__all__ = [
    "IChatBackend",
    "IGovernanceLedger",
    "ISignatureVerifier",
]
