"""Request/response schemas for user management endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from usermanagement.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)

# Profile columns (email, first/last name) are String(255).
PROFILE_FIELD_MAX_LEN = 255


class RoleResponse(BaseModel):
    """Role as exposed to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str


class UserResponse(BaseModel):
    """User entry without password fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str | None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    roles: list[RoleResponse] = Field(default_factory=list)


class UsersListResponse(BaseModel):
    """Response for GET /users."""

    users: list[UserResponse]


class RolesListResponse(BaseModel):
    """Response for GET /roles."""

    roles: list[RoleResponse]


class UserCreateRequest(BaseModel):
    """New account. Password rules are enforced by the service, not here."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    confirm_password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)
    email: str | None = Field(default=None, max_length=PROFILE_FIELD_MAX_LEN)
    first_name: str | None = Field(default=None, max_length=PROFILE_FIELD_MAX_LEN)
    last_name: str | None = Field(default=None, max_length=PROFILE_FIELD_MAX_LEN)
    role_ids: list[int] = Field(default_factory=list, description="Ids of existing roles")


class UserUpdateRequest(BaseModel):
    """
    Full replacement of a user's profile and roles.

    Omitted fields overwrite the stored value with null; the password is never
    changed here.
    """

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: str | None = Field(default=None, max_length=PROFILE_FIELD_MAX_LEN)
    first_name: str | None = Field(default=None, max_length=PROFILE_FIELD_MAX_LEN)
    last_name: str | None = Field(default=None, max_length=PROFILE_FIELD_MAX_LEN)
    role_ids: list[int] = Field(default_factory=list)


class ChangePasswordRequest(BaseModel):
    """Body of POST /users/{id}/password."""

    current_password: str | None = Field(default=None, max_length=PASSWORD_MAX_LEN)
    new_password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    confirm_password: str = Field(..., max_length=PASSWORD_MAX_LEN)


class ChangePasswordForm(BaseModel):
    """Password change input for UserService.change_password. Never persisted."""

    id: int | None = None
    current_password: str | None = None
    new_password: str | None = None
    confirm_password: str | None = None


class ErrorDetail(BaseModel):
    """A rejected input field and the message shown for it."""

    field: str | None = None
    message: str


class FieldErrorResponse(BaseModel):
    """Body of a 409/422 raised for one input field."""

    detail: ErrorDetail
