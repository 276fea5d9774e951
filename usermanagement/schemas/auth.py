"""Request/response schemas for auth endpoints and the resolved principal."""

from pydantic import BaseModel, ConfigDict, Field

from usermanagement.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class Principal(BaseModel):
    """
    Authenticated identity: username, stored password hash, and authority tokens.

    Built per authentication check and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)
    authorities: frozenset[str] = frozenset()

    def has_authority(self, authority: str) -> bool:
        return authority in self.authorities
