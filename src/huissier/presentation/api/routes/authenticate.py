"""
Authentication API routes.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from huissier.application.use_cases.authenticate_realm_member import (
    AuthenticateRealmMember,
)
from huissier.di.dependencies import get_authenticate_realm_member
from huissier.domain.value_objects.auth_outcome import AuthState
from huissier.presentation.schemas.auth_schemas import (
    AuthenticateRequest,
    AuthenticateResponse,
)

router = APIRouter(prefix="/authenticate", tags=["Authentication"])

STATUS_BY_STATE = {
    AuthState.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    AuthState.SIGNATURE_INVALID: status.HTTP_401_UNAUTHORIZED,
    AuthState.UNAUTHORIZED: status.HTTP_200_OK,
    AuthState.RESOLUTION_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    AuthState.PROVISIONING_FAILED: status.HTTP_502_BAD_GATEWAY,
    AuthState.TOKEN_ISSUED: status.HTTP_200_OK,
}


@router.post(
    "",
    response_model=AuthenticateResponse,
    response_model_exclude_none=True,
    summary="Authenticate realm member",
    description="Verify wallet signature and realm membership, then open chat",
)
async def authenticate(
    request: AuthenticateRequest,
    use_case: AuthenticateRealmMember = Depends(get_authenticate_realm_member),
) -> JSONResponse:
    """
    Authenticate a wallet for a realm's chat.

    Flow:
    1. Validate request shape
    2. Verify signed challenge
    3. Resolve owner/delegate membership on the governance ledger
    4. Provision chat identity, team and default channels
    5. Return chat session token
    """
    outcome = await use_case.execute(request.to_domain())

    return JSONResponse(
        status_code=STATUS_BY_STATE[outcome.state],
        content=outcome.to_response(),
    )
