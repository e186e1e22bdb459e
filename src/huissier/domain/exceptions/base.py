"""
Base domain exceptions.
"""


class HuissierException(Exception):
    """Base exception for all Huissier domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(HuissierException):
    """Raised when an incoming request fails shape validation."""

    def __init__(self, field: str, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.reason = reason
