"""
Authentication API schemas.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from huissier.domain.entities.auth_request import AuthRequest, RealmRef

# ================================================================
# Request Schemas
# ================================================================


class RealmSchema(BaseModel):
    """Realm addressed by the request."""

    model_config = ConfigDict(populate_by_name=True)

    governance_id: str = Field(
        ...,
        alias="governanceId",
        description="Governance program id (base58)",
    )
    pub_key: str = Field(..., alias="pubKey", description="Realm address (base58)")


class AuthenticateRequest(BaseModel):
    """
    Request to authenticate a wallet against a realm.

    Shape rules (base58/base64) are checked by the use case, not here,
    so that every malformed request gets the same response.
    """

    model_config = ConfigDict(populate_by_name=True)

    pub_key: str = Field(..., alias="pubKey", description="Wallet public key")
    message: str = Field(..., description="Signed challenge")
    realm: RealmSchema

    def to_domain(self) -> AuthRequest:
        """Convert to domain AuthRequest."""
        return AuthRequest(
            public_key=self.pub_key,
            signed_message=self.message,
            realm=RealmRef(
                governance_id=self.realm.governance_id,
                pub_key=self.realm.pub_key,
            ),
        )


# ================================================================
# Response Schemas
# ================================================================


class AuthenticateResponse(BaseModel):
    """Authentication result (documentation model)."""

    model_config = ConfigDict(populate_by_name=True)

    chat_authenticated: Optional[bool] = Field(None, alias="chatAuthenticated")
    stream_token: Optional[str] = Field(None, alias="streamToken")
    error: Optional[str] = None
