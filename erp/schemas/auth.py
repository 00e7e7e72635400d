"""Auth API schemas."""

from pydantic import Field

from erp.schemas.common import CamelModel


class LoginRequest(CamelModel):
    """Request body for login."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    """Bearer token response. The token's sub is the user id."""

    access_token: str
    token_type: str = "bearer"
    user_id: str
