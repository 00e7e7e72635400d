"""User API.

Role and active-flag changes and deactivation need an administrator's bearer
token: 401 without one, 403 when the session user is not an administrator.
The identity header only attributes the change.
"""

from fastapi import APIRouter, Query

from erp.api.dependencies import ActorDep, PaginationDep, SessionUserDep, StorageDep
from erp.domain.exceptions import ResourceNotFoundException
from erp.schemas.audit_log import AuditLogEntryResponse
from erp.schemas.common import SuccessResponse
from erp.schemas.user import UserCreate, UserResponse, UserUpdate

router = APIRouter()

ENTITY_TYPE = "user"


@router.get("", response_model=list[UserResponse])
async def list_users(
    storage: StorageDep, page: PaginationDep, role: str | None = Query(None)
):
    return await storage.users.list(page.limit, page.offset, role=role)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, storage: StorageDep):
    user = await storage.users.get_by_id(user_id)
    if user is None:
        raise ResourceNotFoundException(ENTITY_TYPE, user_id)
    return user


@router.post("", response_model=UserResponse)
async def create_user(
    body: UserCreate,
    storage: StorageDep,
    actor_id: ActorDep,
    session_user_id: SessionUserDep,
):
    data = body.model_dump(exclude={"password"})
    return await storage.users.create_user(
        data, body.password, actor_id, authorized_by=session_user_id
    )


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: UserUpdate,
    storage: StorageDep,
    actor_id: ActorDep,
    session_user_id: SessionUserDep,
):
    """Partial update. Changing username is rejected (400)."""
    return await storage.users.update(
        user_id, body.to_storage(), actor_id, authorized_by=session_user_id
    )


@router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user(
    user_id: str,
    storage: StorageDep,
    actor_id: ActorDep,
    session_user_id: SessionUserDep,
):
    """Deactivate a user (administrator only)."""
    await storage.users.soft_delete(user_id, actor_id, authorized_by=session_user_id)
    return SuccessResponse()


@router.get("/{user_id}/history", response_model=list[AuditLogEntryResponse])
async def get_user_history(user_id: str, storage: StorageDep):
    return await storage.get_audit_history(ENTITY_TYPE, user_id)
