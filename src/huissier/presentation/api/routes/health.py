"""
Health check API routes.
"""

from fastapi import APIRouter, Depends, status

from huissier.di.container import DIContainer
from huissier.di.dependencies import get_container

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_probe(container: DIContainer = Depends(get_container)):
    """
    Liveness probe.

    Huissier keeps no state between requests; answering is enough.
    Ledger and chat reachability are not probed here.
    """
    settings = container.settings
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "env": settings.ENV,
    }
