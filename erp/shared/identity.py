"""Attribution identity resolution.

Decides which user id a mutation is attributed to. Pure function; the
FastAPI adapter that extracts the candidates from a request lives in
erp.api.dependencies.
"""

from erp.core.constants import SYSTEM_USER_ID
from erp.shared.utils.uuid import is_valid_uuid


def resolve_user_id(
    session_user_id: str | None,
    header_user_id: str | None,
    fallback: str = SYSTEM_USER_ID,
) -> str:
    """Return the attribution identity; first valid candidate wins.

    Priority: authenticated session identity, then the client-supplied
    identity header, then the fallback system identity. Candidates that are
    not well-formed UUIDs are ignored. Never raises.
    """
    for candidate in (session_user_id, header_user_id):
        value = candidate.strip() if isinstance(candidate, str) else None
        if is_valid_uuid(value):
            return value.lower()
    return fallback or SYSTEM_USER_ID
