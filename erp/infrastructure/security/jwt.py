"""Bearer session tokens (JWT) carrying the authenticated user id in sub.

Uses erp.core.config for secret, algorithm and lifetime.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from erp.core.config import get_settings
from erp.shared.utils.datetime import utc_now


def create_access_token(
    subject: str,
    extra_claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed token for subject (a user id).

    Args:
        subject: Value of the sub claim.
        extra_claims: Optional additional claims (e.g. role).
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.

    Raises:
        ValueError: If no signing secret is configured.
    """
    settings = get_settings()
    secret = settings.secret_key.get_secret_value()
    if not secret:
        raise ValueError("SECRET_KEY is not configured; cannot issue tokens")
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = dict(extra_claims or {})
    claims.update(sub=subject, exp=utc_now() + ttl)
    return cast(str, jwt.encode(claims, secret, algorithm=settings.algorithm))


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ValueError: If the token is invalid, expired, or missing exp/sub,
            or when no signing secret is configured.
    """
    settings = get_settings()
    secret = settings.secret_key.get_secret_value()
    if not secret:
        raise ValueError("SECRET_KEY is not configured")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload
