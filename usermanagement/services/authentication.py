"""Username/password authentication against the user store."""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session

from usermanagement.core.security import verify_password
from usermanagement.repositories import UserRepository
from usermanagement.schemas.auth import Principal
from usermanagement.services.exceptions import BadCredentialsError
from usermanagement.services.user_details import UserDetailsService

BAD_CREDENTIALS = "Invalid username or password."


class AuthenticationProvider:
    """
    Checks a login against the principal resolved by user_details_service.

    Both collaborators are plain attributes so callers and tests can see
    exactly what the provider was built with.
    """

    def __init__(
        self,
        user_details_service: UserDetailsService,
        password_verifier: Callable[[str, str], bool] = verify_password,
    ) -> None:
        self.user_details_service = user_details_service
        self.password_verifier = password_verifier

    def authenticate(self, username: str | None, password: str) -> Principal:
        """
        Return the principal for valid credentials.

        Raises PrincipalNotFoundError for an unknown username and
        BadCredentialsError when the password does not verify.
        """
        principal = self.user_details_service.load_user_by_username(username)
        if not principal.password or not self.password_verifier(password, principal.password):
            raise BadCredentialsError(BAD_CREDENTIALS)
        return principal


def build_authentication_provider(session: Session) -> AuthenticationProvider:
    """Wire the default provider: SQLAlchemy-backed user details and bcrypt verification."""
    return AuthenticationProvider(UserDetailsService(UserRepository(session)))
