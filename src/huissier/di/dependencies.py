"""
FastAPI dependency injection.

Resolves the container that the application factory attached to app.state.
"""

from fastapi import Depends, Request

from huissier.application.use_cases.authenticate_realm_member import (
    AuthenticateRealmMember,
)
from huissier.di.container import DIContainer


def get_container(request: Request) -> DIContainer:
    """Get the application's DI container."""
    return request.app.state.container


def get_authenticate_realm_member(
    container: DIContainer = Depends(get_container),
) -> AuthenticateRealmMember:
    """Get AuthenticateRealmMember use case dependency."""
    return container.get_authenticate_realm_member()
