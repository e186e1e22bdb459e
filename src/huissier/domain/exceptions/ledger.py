"""
Governance ledger exceptions.
"""

from typing import Optional

from huissier.domain.exceptions.base import HuissierException


class LedgerError(HuissierException):
    """Raised when the governance ledger is unavailable or returns bad data."""

    def __init__(self, message: str, method: Optional[str] = None):
        """
        Initialize ledger error.

        Args:
            message: Error description
            method: RPC method that failed
        """
        super().__init__(message, code="LEDGER_ERROR")
        self.method = method


class AccountDecodeError(LedgerError):
    """Raised when a governance account cannot be decoded."""

    def __init__(self, account: str, reason: str):
        super().__init__(f"Cannot decode account {account}: {reason}")
        self.account = account
