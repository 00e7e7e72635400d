"""Auth API: exchange username/password for a bearer token.

The token's sub becomes the session identity used for audit attribution
and for administrator checks.
"""

from fastapi import APIRouter

from erp.api.dependencies import StorageDep
from erp.domain.exceptions import AuthenticationException, AuthNotConfiguredException
from erp.infrastructure.security.jwt import create_access_token
from erp.schemas.auth import LoginRequest, TokenResponse
from erp.shared.logging import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, storage: StorageDep) -> TokenResponse:
    """Return a bearer token; 401 on bad credentials, 503 when signing is not configured."""
    user = await storage.users.authenticate(body.username, body.password)
    if user is None:
        logger.info("Failed login for username=%r", body.username)
        raise AuthenticationException("Invalid username or password")
    try:
        token = create_access_token(user.id, extra_claims={"role": user.role})
    except ValueError as e:
        raise AuthNotConfiguredException() from e
    return TokenResponse(access_token=token, user_id=user.id)
