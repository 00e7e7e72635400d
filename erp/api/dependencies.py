"""FastAPI dependencies: storage façade, acting identity, pagination.

Routes take these via Annotated[..., Depends(...)]; no route builds a
storage module itself. ActorDep is for attribution only and may come from
the client-supplied identity header; SessionUserDep is set only by a valid
bearer token and is what authorization checks use.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request

from erp.core.config import get_settings
from erp.infrastructure.persistence.storage.modular_storage import ModularStorage
from erp.infrastructure.security.jwt import verify_token
from erp.shared.identity import resolve_user_id
from erp.shared.logging import get_logger

logger = get_logger(__name__)

_BEARER_PREFIX = "bearer "


def get_storage(request: Request) -> ModularStorage:
    """Return the process-wide façade built by create_app()."""
    return request.app.state.storage


def get_session_user_id(request: Request) -> str | None:
    """User id from a valid bearer token, or None (missing, invalid or expired)."""
    authorization = request.headers.get("Authorization") or ""
    if not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX):].strip()
    if not token:
        return None
    try:
        payload = verify_token(token)
    except ValueError as e:
        logger.debug("Ignoring bearer token: %s", e)
        return None
    return payload.get("sub")


def get_actor_id(request: Request) -> str:
    """Attribution identity for this request: session, then identity header, then system."""
    settings = get_settings()
    actor_id = resolve_user_id(
        get_session_user_id(request),
        request.headers.get(settings.user_id_header),
        settings.system_user_id,
    )
    request.state.actor_id = actor_id
    return actor_id


@dataclass(frozen=True)
class Pagination:
    limit: int
    offset: int


def get_pagination(
    limit: int | None = Query(None, ge=1, description="Page size (default 50)"),
    offset: int = Query(0, ge=0),
) -> Pagination:
    """Page window; limit defaults to settings.default_page_size and is capped at max_page_size."""
    settings = get_settings()
    size = limit if limit is not None else settings.default_page_size
    return Pagination(limit=min(size, settings.max_page_size), offset=offset)


StorageDep = Annotated[ModularStorage, Depends(get_storage)]
SessionUserDep = Annotated[str | None, Depends(get_session_user_id)]
ActorDep = Annotated[str, Depends(get_actor_id)]
PaginationDep = Annotated[Pagination, Depends(get_pagination)]
