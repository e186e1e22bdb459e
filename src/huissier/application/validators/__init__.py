"""
Request validators.
"""

from huissier.application.validators.auth_request_validator import (
    AuthRequestValidator,
)

__all__ = ["AuthRequestValidator"]
