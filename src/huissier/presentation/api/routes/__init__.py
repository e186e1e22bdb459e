"""
API routes.
"""

from huissier.presentation.api.routes import authenticate, health

__all__ = ["authenticate", "health"]
