"""
Chat backend exceptions.
"""

from typing import List, Optional

from huissier.domain.exceptions.base import HuissierException


class ChatBackendError(HuissierException):
    """Raised when a chat backend call fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        operation: Optional[str] = None,
    ):
        """
        Initialize chat backend error.

        Args:
            message: Error message
            status_code: HTTP status code from the chat API
            operation: Backend operation that failed
        """
        super().__init__(message, code="CHAT_BACKEND_ERROR")
        self.status_code = status_code
        self.operation = operation


class ProvisioningError(HuissierException):
    """Raised when provisioning steps failed and the policy is strict."""

    def __init__(self, failed_steps: List[str]):
        super().__init__(
            f"Chat provisioning failed at: {', '.join(failed_steps)}",
            code="PROVISIONING_ERROR",
        )
        self.failed_steps = failed_steps
