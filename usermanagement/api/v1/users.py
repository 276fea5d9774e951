"""User management endpoints: list, create, read, update, delete, change password."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError

from usermanagement.api.v1.auth import get_current_principal, require_admin
from usermanagement.api.v1.deps import get_role_repository, get_user_service
from usermanagement.models import Role, User
from usermanagement.repositories import RoleRepository
from usermanagement.schemas.auth import Principal
from usermanagement.schemas.users import (
    ChangePasswordForm,
    ChangePasswordRequest,
    ErrorDetail,
    FieldErrorResponse,
    RoleResponse,
    UserCreateRequest,
    UserResponse,
    UsersListResponse,
    UserUpdateRequest,
)
from usermanagement.services.exceptions import (
    FieldValidationError,
    InvalidCredentialError,
    PasswordMismatchError,
    PasswordPolicyError,
    UserManagementError,
    UsernameOrIdNotFoundError,
)
from usermanagement.services.user_service import USERNAME_NOT_AVAILABLE, UserService

router = APIRouter()

FIELD_ERROR_RESPONSES = {
    409: {"model": FieldErrorResponse, "description": "Username taken at commit time"},
    422: {"model": FieldErrorResponse, "description": "Input field rejected"},
}


def _to_response(user: User) -> UserResponse:
    roles = sorted(user.roles or (), key=lambda r: r.id or 0)
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        roles=[RoleResponse.model_validate(r) for r in roles],
    )


def _field_error(status_code: int, field: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorDetail(field=field, message=message).model_dump(),
    )


def _to_http_error(e: UserManagementError) -> HTTPException:
    """Map service errors to status codes; the message is passed through unchanged."""
    if isinstance(e, UsernameOrIdNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, FieldValidationError):
        return _field_error(422, e.field_name, e.message)
    if isinstance(e, InvalidCredentialError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    if isinstance(e, (PasswordPolicyError, PasswordMismatchError)):
        return HTTPException(status_code=422, detail=e.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


def _username_conflict() -> HTTPException:
    # Another request took the username between the availability check and commit.
    return _field_error(status.HTTP_409_CONFLICT, "username", USERNAME_NOT_AVAILABLE)


def _resolve_roles(role_ids: list[int], roles: RoleRepository) -> set[Role]:
    found = roles.find_by_ids(role_ids)
    missing = set(role_ids) - {r.id for r in found}
    if missing:
        raise _field_error(422, "roles", f"Unknown role id(s): {sorted(missing)}")
    return set(found)


@router.get("", response_model=UsersListResponse)
def list_users(
    _principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UsersListResponse:
    """List all users."""
    return UsersListResponse(users=[_to_response(u) for u in service.get_all_users()])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses=FIELD_ERROR_RESPONSES,
)
def create_user(
    body: UserCreateRequest,
    _admin: Annotated[Principal, Depends(require_admin)],
    service: Annotated[UserService, Depends(get_user_service)],
    roles: Annotated[RoleRepository, Depends(get_role_repository)],
) -> UserResponse:
    """
    Create a user (admin only).

    422 with {"field", "message"} when the username is taken, the confirm
    password is missing, the two passwords differ, or a role id is unknown.
    """
    user = User(
        username=body.username,
        password=body.password,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        roles=_resolve_roles(body.role_ids, roles),
    )
    user.confirm_password = body.confirm_password
    try:
        created = service.create_user(user)
    except UserManagementError as e:
        raise _to_http_error(e) from e
    except IntegrityError as e:
        raise _username_conflict() from e
    return _to_response(created)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    _principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    try:
        return _to_response(service.get_user_by_id(user_id))
    except UserManagementError as e:
        raise _to_http_error(e) from e


@router.put("/{user_id}", response_model=UserResponse, responses=FIELD_ERROR_RESPONSES)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    _admin: Annotated[Principal, Depends(require_admin)],
    service: Annotated[UserService, Depends(get_user_service)],
    roles: Annotated[RoleRepository, Depends(get_role_repository)],
) -> UserResponse:
    """
    Replace profile fields and roles (admin only). The password is left as is.

    404 for an unknown user takes precedence over role id errors; 409 when
    the new username belongs to another user.
    """
    try:
        service.get_user_by_id(user_id)
    except UserManagementError as e:
        raise _to_http_error(e) from e

    incoming = User(
        id=user_id,
        username=body.username,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        roles=_resolve_roles(body.role_ids, roles),
    )
    try:
        return _to_response(service.update_user(incoming))
    except UserManagementError as e:
        raise _to_http_error(e) from e
    except IntegrityError as e:
        raise _username_conflict() from e


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    _admin: Annotated[Principal, Depends(require_admin)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    try:
        service.delete_user(user_id)
    except UserManagementError as e:
        raise _to_http_error(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{user_id}/password", response_model=UserResponse)
def change_password(
    user_id: int,
    body: ChangePasswordRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """
    Change a user's password.

    Callers holding the admin authority skip the current-password check.
    403 on a wrong current password, 422 when the new password equals the
    current one or does not match its confirmation.
    """
    form = ChangePasswordForm(
        id=user_id,
        current_password=body.current_password,
        new_password=body.new_password,
        confirm_password=body.confirm_password,
    )
    try:
        user = service.change_password(form, caller_authorities=principal.authorities)
    except UserManagementError as e:
        raise _to_http_error(e) from e
    return _to_response(user)
