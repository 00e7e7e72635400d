"""User API schemas. Password hashes never leave the server."""

from pydantic import EmailStr, Field

from erp.schemas.common import CamelModel, EntityResponse


class UserCreate(CamelModel):
    """Request body for creating a user."""

    username: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=8)
    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str = Field(default="user", min_length=1)


class UserUpdate(CamelModel):
    """Partial update. username is immutable; role and isActive need an administrator."""

    username: str | None = None
    password: str | None = Field(default=None, min_length=8)
    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = Field(default=None, min_length=1)
    is_active: bool | None = None


class UserResponse(EntityResponse):
    """User response (no password)."""

    username: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str
