"""
CallResult value object - explicit outcome of a guarded external call.
"""

from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, Tuple, Type, TypeVar

from huissier.domain.exceptions.base import HuissierException

T = TypeVar("T")


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """
    Success/failure variant for one collaborator call.

    Callers decide whether a failure is fatal by inspecting the result
    instead of relying on which calls happen to be wrapped in try/except.
    """

    operation: str
    value: Optional[T] = None
    error: Optional[HuissierException] = None

    @property
    def ok(self) -> bool:
        """True if the call succeeded."""
        return self.error is None

    @classmethod
    def success(cls, operation: str, value: Optional[T] = None) -> "CallResult[T]":
        """Build a successful result."""
        return cls(operation=operation, value=value)

    @classmethod
    def failure(cls, operation: str, error: HuissierException) -> "CallResult[T]":
        """Build a failed result."""
        return cls(operation=operation, error=error)


async def capture(
    operation: str,
    awaitable: Awaitable[T],
    errors: Tuple[Type[HuissierException], ...] = (HuissierException,),
) -> CallResult[T]:
    """
    Await a collaborator call and wrap its outcome.

    Only the given domain exception types are captured; anything else
    is a programming error and propagates.

    Args:
        operation: Name used for logs and metrics
        awaitable: Pending collaborator call
        errors: Exception types that count as call failure

    Returns:
        CallResult with value or error
    """
    try:
        value = await awaitable
    except errors as e:
        return CallResult.failure(operation, e)
    return CallResult.success(operation, value)
