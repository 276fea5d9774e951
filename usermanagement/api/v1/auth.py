"""JWT login and auth dependencies (get_current_principal, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from usermanagement.api.v1.deps import get_authentication_provider, get_user_details_service
from usermanagement.core.config import settings
from usermanagement.core.security import create_access_token, decode_access_token
from usermanagement.schemas.auth import LoginRequest, Principal, TokenResponse
from usermanagement.services.authentication import AuthenticationProvider
from usermanagement.services.exceptions import BadCredentialsError, PrincipalNotFoundError
from usermanagement.services.user_details import UserDetailsService

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("", response_model=TokenResponse)
def login(
    body: LoginRequest,
    provider: Annotated[AuthenticationProvider, Depends(get_authentication_provider)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    try:
        principal = provider.authenticate(body.username, body.password)
    except (PrincipalNotFoundError, BadCredentialsError) as e:
        raise _unauthorized(e.message) from e
    token = create_access_token(sub=principal.username, authorities=principal.authorities)
    return TokenResponse(access_token=token, token_type="bearer")


def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    user_details: Annotated[UserDetailsService, Depends(get_user_details_service)],
) -> Principal:
    """Dependency: require valid Bearer JWT and return the caller's current principal. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    sub = payload.get("sub")
    if not sub:
        raise _unauthorized("Invalid token payload")
    # Authorities are re-read so role changes apply before the token expires.
    try:
        return user_details.load_user_by_username(sub)
    except PrincipalNotFoundError:
        raise _unauthorized("User not found")


def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Dependency: require the admin authority. Raises 403 otherwise."""
    if not principal.has_authority(settings.ADMIN_AUTHORITY):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return principal
