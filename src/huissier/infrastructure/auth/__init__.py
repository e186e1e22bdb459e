"""
Wallet authentication adapters.
"""

from huissier.infrastructure.auth.solana_message_verifier import (
    SolanaMessageVerifier,
)

__all__ = ["SolanaMessageVerifier"]
