"""
Dependency Injection module for Huissier.

Provides container and dependency functions for FastAPI routes.
"""

from huissier.di.container import DIContainer
from huissier.di.dependencies import get_authenticate_realm_member, get_container

__all__ = [
    "DIContainer",
    "get_authenticate_realm_member",
    "get_container",
]
