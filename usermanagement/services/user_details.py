"""Resolve a username into the principal used for authentication."""

import logging

from usermanagement.repositories import UserRepository
from usermanagement.schemas.auth import Principal
from usermanagement.services.exceptions import PrincipalNotFoundError

logger = logging.getLogger(__name__)

LOGIN_USERNAME_INVALID = "Login Username Invalid."


class UserDetailsService:
    """Maps a persisted user and its roles to a Principal."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    def load_user_by_username(self, username: str | None) -> Principal:
        """
        Look up username and build its Principal.

        The repository is always queried, even for None or empty input, so a
        miss is the only failure path. Each role contributes its description
        as an authority; duplicates collapse and no roles means no authorities.
        """
        user = self.repository.find_by_username(username)
        if user is None:
            logger.info("Login lookup failed for username=%r", username)
            raise PrincipalNotFoundError(LOGIN_USERNAME_INVALID)

        authorities = frozenset(role.description for role in (user.roles or ()))
        return Principal(
            username=user.username,
            password=user.password,
            authorities=authorities,
        )
