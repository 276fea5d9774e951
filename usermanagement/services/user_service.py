"""User account operations: list, create, read, update, delete, change password."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from usermanagement.core.config import settings
from usermanagement.core.security import hash_password
from usermanagement.models import User
from usermanagement.services.exceptions import (
    FieldValidationError,
    InvalidCredentialError,
    PasswordMismatchError,
    PasswordPolicyError,
    UsernameOrIdNotFoundError,
)

if TYPE_CHECKING:
    from usermanagement.repositories import UserRepository
    from usermanagement.schemas.users import ChangePasswordForm

logger = logging.getLogger(__name__)

USER_ID_NOT_FOUND = "User id does not exist."
USERNAME_NOT_AVAILABLE = "Username not available"
CONFIRM_PASSWORD_REQUIRED = "Confirm Password is required"
PASSWORDS_NOT_SAME = "Password and Confirm Password are not the same"
CURRENT_PASSWORD_INVALID = "Current Password invalid."
NEW_PASSWORD_NOT_DIFFERENT = "New password must be different from the current password."
NEW_PASSWORD_MISMATCH = "New Password and Confirm Password do not match."


class UserService:
    """
    Stateless service over a user repository.

    Every operation runs all of its checks before the single save or delete,
    so a rejected call never leaves a partial write behind.
    """

    def __init__(
        self,
        repository: UserRepository,
        password_encoder: Callable[[str], str] = hash_password,
        admin_authority: str | None = None,
    ) -> None:
        self.repository = repository
        self.password_encoder = password_encoder
        self.admin_authority = admin_authority or settings.ADMIN_AUTHORITY

    def get_all_users(self) -> list[User]:
        return list(self.repository.find_all())

    def create_user(self, user: User) -> User:
        """
        Validate and persist a new user.

        Checks run in a fixed order: username availability, confirm password
        present, password equals confirm password. The plaintext password is
        then replaced by its encoded form before saving.
        """
        self._check_username_available(user)
        self._check_password_valid(user)
        user.password = self.password_encoder(user.password)
        saved = self.repository.save(user)
        logger.info("Created user username=%s", saved.username)
        return saved

    def get_user_by_id(self, user_id: int | None) -> User:
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise UsernameOrIdNotFoundError(USER_ID_NOT_FOUND)
        return user

    def update_user(self, from_user: User) -> User:
        """Overwrite the stored user's profile fields and roles with from_user's; password is kept."""
        to_user = self.get_user_by_id(from_user.id)
        _map_user(from_user, to_user)
        saved = self.repository.save(to_user)
        logger.info("Updated user id=%s", saved.id)
        return saved

    def delete_user(self, user_id: int | None) -> None:
        user = self.get_user_by_id(user_id)
        self.repository.delete(user)
        logger.info("Deleted user id=%s", user_id)

    def change_password(
        self,
        form: ChangePasswordForm,
        caller_authorities: Iterable[str] = (),
    ) -> User:
        """
        Replace a user's password after sequential checks.

        Order: user exists; current password matches (skipped when the caller
        holds the admin authority); new password differs from the stored one;
        new password equals its confirmation. The current and same-password
        checks compare against the stored value as-is.
        """
        user = self.get_user_by_id(form.id)

        if not self.is_admin(caller_authorities) and form.current_password != user.password:
            logger.info("Password change rejected for user id=%s: current password invalid", user.id)
            raise InvalidCredentialError(CURRENT_PASSWORD_INVALID)

        if user.password == form.new_password:
            raise PasswordPolicyError(NEW_PASSWORD_NOT_DIFFERENT)

        if form.new_password != form.confirm_password:
            raise PasswordMismatchError(NEW_PASSWORD_MISMATCH)

        user.password = self.password_encoder(form.new_password)
        saved = self.repository.save(user)
        logger.info("Changed password for user id=%s", saved.id)
        return saved

    def is_admin(self, caller_authorities: Iterable[str]) -> bool:
        return self.admin_authority in set(caller_authorities or ())

    def _check_username_available(self, user: User) -> None:
        if self.repository.find_by_username(user.username) is not None:
            raise FieldValidationError("username", USERNAME_NOT_AVAILABLE)

    @staticmethod
    def _check_password_valid(user: User) -> None:
        if not user.confirm_password:
            raise FieldValidationError("confirmPassword", CONFIRM_PASSWORD_REQUIRED)
        if user.password != user.confirm_password:
            raise FieldValidationError("password", PASSWORDS_NOT_SAME)


def _map_user(from_user: User, to_user: User) -> None:
    """Copy profile fields verbatim, absent values included."""
    to_user.username = from_user.username
    to_user.first_name = from_user.first_name
    to_user.last_name = from_user.last_name
    to_user.email = from_user.email
    to_user.roles = set(from_user.roles or ())
