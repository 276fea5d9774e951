"""Errors raised by the user services. Messages are shown to callers verbatim."""


class UserManagementError(Exception):
    """Base class for rejected user operations."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsernameOrIdNotFoundError(UserManagementError):
    """Raised when a user id (or username) lookup misses."""


class FieldValidationError(UserManagementError):
    """Raised when one named input field fails validation."""

    def __init__(self, field_name: str, message: str) -> None:
        self.field_name = field_name
        super().__init__(message)


class InvalidCredentialError(UserManagementError):
    """Raised when a non-admin caller supplies the wrong current password."""


class PasswordPolicyError(UserManagementError):
    """Raised when a new password breaks a business rule (e.g. reuse)."""


class PasswordMismatchError(UserManagementError):
    """Raised when the new password and its confirmation differ."""


class PrincipalNotFoundError(UserManagementError):
    """Raised when login cannot find the username."""


class BadCredentialsError(UserManagementError):
    """Raised when a login password does not verify against the stored hash."""
