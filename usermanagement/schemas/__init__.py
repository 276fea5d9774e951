"""Pydantic request/response schemas."""

from usermanagement.schemas.auth import LoginRequest, Principal, TokenResponse
from usermanagement.schemas.health import HealthResponse
from usermanagement.schemas.users import (
    ChangePasswordForm,
    ChangePasswordRequest,
    ErrorDetail,
    FieldErrorResponse,
    RoleResponse,
    RolesListResponse,
    UserCreateRequest,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
)

__all__ = [
    "ChangePasswordForm",
    "ChangePasswordRequest",
    "ErrorDetail",
    "FieldErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "Principal",
    "RoleResponse",
    "RolesListResponse",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
    "UsersListResponse",
]
