"""Unit tests for UserService: CRUD and the ordered password-change checks."""

import unittest
from unittest.mock import MagicMock

from tests.factories import make_role, make_user
from usermanagement.models import User
from usermanagement.schemas.users import ChangePasswordForm
from usermanagement.services.exceptions import (
    FieldValidationError,
    InvalidCredentialError,
    PasswordMismatchError,
    PasswordPolicyError,
    UsernameOrIdNotFoundError,
)
from usermanagement.services.user_service import UserService

ADMIN = frozenset({"ROLE_ADMIN", "ROLE_USER"})
NON_ADMIN = frozenset({"ROLE_USER"})


class UserServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.repository = MagicMock()
        self.repository.save.side_effect = lambda user: user
        self.encoder = MagicMock(side_effect=lambda plain: f"encoded:{plain}")
        self.service = UserService(
            self.repository,
            password_encoder=self.encoder,
            admin_authority="ROLE_ADMIN",
        )
        self.user = make_user()


class TestGetAllUsers(UserServiceTestCase):
    def test_returns_all_users(self) -> None:
        self.repository.find_all.return_value = [self.user, User()]
        result = self.service.get_all_users()
        self.assertEqual(len(result), 2)
        self.assertIs(result[0], self.user)
        self.repository.find_all.assert_called_once_with()

    def test_empty(self) -> None:
        self.repository.find_all.return_value = []
        self.assertEqual(self.service.get_all_users(), [])


class TestCreateUser(UserServiceTestCase):
    def test_success_encodes_password(self) -> None:
        self.repository.find_by_username.return_value = None
        result = self.service.create_user(self.user)
        self.assertIs(result, self.user)
        self.assertEqual(result.password, "encoded:password123")
        self.encoder.assert_called_once_with("password123")
        self.repository.find_by_username.assert_called_once_with("testuser")
        self.repository.save.assert_called_once_with(self.user)

    def test_stored_password_is_never_plaintext(self) -> None:
        self.repository.find_by_username.return_value = None
        alice = make_user(username="alice", password="p1", confirm_password="p1")
        self.service.create_user(alice)
        saved = self.repository.save.call_args.args[0]
        self.assertEqual(saved.password, "encoded:p1")
        self.assertNotEqual(saved.password, "p1")

    def test_username_not_available(self) -> None:
        self.repository.find_by_username.return_value = make_user(user_id=7)
        with self.assertRaises(FieldValidationError) as ctx:
            self.service.create_user(self.user)
        self.assertEqual(ctx.exception.field_name, "username")
        self.assertEqual(ctx.exception.message, "Username not available")
        self.encoder.assert_not_called()
        self.repository.save.assert_not_called()

    def test_username_checked_before_password_fields(self) -> None:
        self.repository.find_by_username.return_value = make_user(user_id=7)
        self.user.confirm_password = None
        with self.assertRaises(FieldValidationError) as ctx:
            self.service.create_user(self.user)
        self.assertEqual(ctx.exception.field_name, "username")

    def test_confirm_password_none(self) -> None:
        self.repository.find_by_username.return_value = None
        self.user.confirm_password = None
        with self.assertRaises(FieldValidationError) as ctx:
            self.service.create_user(self.user)
        self.assertEqual(ctx.exception.field_name, "confirmPassword")
        self.assertEqual(ctx.exception.message, "Confirm Password is required")
        self.encoder.assert_not_called()
        self.repository.save.assert_not_called()

    def test_confirm_password_empty(self) -> None:
        self.repository.find_by_username.return_value = None
        self.user.confirm_password = ""
        with self.assertRaises(FieldValidationError) as ctx:
            self.service.create_user(self.user)
        self.assertEqual(ctx.exception.field_name, "confirmPassword")
        self.repository.save.assert_not_called()

    def test_passwords_do_not_match(self) -> None:
        self.repository.find_by_username.return_value = None
        self.user.confirm_password = "differentPassword"
        with self.assertRaises(FieldValidationError) as ctx:
            self.service.create_user(self.user)
        self.assertEqual(ctx.exception.field_name, "password")
        self.assertEqual(ctx.exception.message, "Password and Confirm Password are not the same")
        self.encoder.assert_not_called()
        self.repository.save.assert_not_called()


class TestGetUserById(UserServiceTestCase):
    def test_found(self) -> None:
        self.repository.find_by_id.return_value = self.user
        result = self.service.get_user_by_id(1)
        self.assertEqual(result.id, 1)
        self.assertEqual(result.username, "testuser")
        self.repository.find_by_id.assert_called_once_with(1)

    def test_not_found(self) -> None:
        self.repository.find_by_id.return_value = None
        with self.assertRaises(UsernameOrIdNotFoundError) as ctx:
            self.service.get_user_by_id(999)
        self.assertEqual(ctx.exception.message, "User id does not exist.")
        self.repository.find_by_id.assert_called_once_with(999)


class TestUpdateUser(UserServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.existing = make_user(
            username="oldusername",
            password="oldPassword",
            first_name="OldFirst",
            last_name="OldLast",
            email="old@example.com",
        )
        self.repository.find_by_id.return_value = self.existing

    def test_overwrites_profile_and_roles(self) -> None:
        admin_role = make_role(2, "ADMIN")
        incoming = User(
            id=1,
            username="updatedusername",
            first_name="UpdatedFirst",
            last_name="UpdatedLast",
            email="updated@example.com",
            password="ignored",
            roles={admin_role},
        )
        result = self.service.update_user(incoming)

        self.assertIs(result, self.existing)
        self.repository.find_by_id.assert_called_once_with(1)
        saved = self.repository.save.call_args.args[0]
        self.assertIs(saved, self.existing)
        self.assertEqual(saved.username, "updatedusername")
        self.assertEqual(saved.first_name, "UpdatedFirst")
        self.assertEqual(saved.last_name, "UpdatedLast")
        self.assertEqual(saved.email, "updated@example.com")
        self.assertEqual(set(saved.roles), {admin_role})
        self.assertEqual(saved.password, "oldPassword")
        self.encoder.assert_not_called()

    def test_absent_fields_overwrite_to_absent(self) -> None:
        self.service.update_user(User(id=1))
        saved = self.repository.save.call_args.args[0]
        self.assertIsNone(saved.username)
        self.assertIsNone(saved.first_name)
        self.assertIsNone(saved.last_name)
        self.assertIsNone(saved.email)
        self.assertEqual(set(saved.roles), set())
        self.assertEqual(saved.password, "oldPassword")

    def test_not_found(self) -> None:
        self.repository.find_by_id.return_value = None
        with self.assertRaises(UsernameOrIdNotFoundError):
            self.service.update_user(User(id=999))
        self.repository.find_by_id.assert_called_once_with(999)
        self.repository.save.assert_not_called()


class TestDeleteUser(UserServiceTestCase):
    def test_deletes_found_user(self) -> None:
        self.repository.find_by_id.return_value = self.user
        self.assertIsNone(self.service.delete_user(1))
        self.repository.find_by_id.assert_called_once_with(1)
        self.repository.delete.assert_called_once_with(self.user)

    def test_not_found(self) -> None:
        self.repository.find_by_id.return_value = None
        with self.assertRaises(UsernameOrIdNotFoundError):
            self.service.delete_user(999)
        self.repository.delete.assert_not_called()


class TestChangePassword(UserServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user.password = "password123"
        self.repository.find_by_id.return_value = self.user

    def _form(self, current: str | None, new: str | None, confirm: str | None, user_id: int = 1) -> ChangePasswordForm:
        return ChangePasswordForm(
            id=user_id,
            current_password=current,
            new_password=new,
            confirm_password=confirm,
        )

    def test_success_non_admin(self) -> None:
        form = self._form("password123", "newPassword456", "newPassword456")
        result = self.service.change_password(form, caller_authorities=NON_ADMIN)
        self.assertIs(result, self.user)
        self.assertEqual(result.password, "encoded:newPassword456")
        self.encoder.assert_called_once_with("newPassword456")
        self.repository.save.assert_called_once_with(self.user)

    def test_success_admin_skips_current_password(self) -> None:
        form = self._form("wrongCurrentPassword", "newPassword456", "newPassword456")
        result = self.service.change_password(form, caller_authorities=ADMIN)
        self.assertEqual(result.password, "encoded:newPassword456")
        self.repository.save.assert_called_once()

    def test_admin_with_no_current_password(self) -> None:
        self.user.password = "old"
        form = self._form(None, "n2", "n2")
        result = self.service.change_password(form, caller_authorities={"ROLE_ADMIN"})
        self.assertEqual(result.password, "encoded:n2")

    def test_invalid_current_password_non_admin(self) -> None:
        form = self._form("wrong", "n2", "n2")
        with self.assertRaises(InvalidCredentialError) as ctx:
            self.service.change_password(form, caller_authorities=NON_ADMIN)
        self.assertEqual(ctx.exception.message, "Current Password invalid.")
        self.encoder.assert_not_called()
        self.repository.save.assert_not_called()

    def test_unauthenticated_caller_is_not_admin(self) -> None:
        form = self._form("wrong", "n2", "n2")
        with self.assertRaises(InvalidCredentialError):
            self.service.change_password(form)

    def test_same_as_current_password(self) -> None:
        form = self._form("password123", "password123", "password123")
        with self.assertRaises(PasswordPolicyError) as ctx:
            self.service.change_password(form, caller_authorities=NON_ADMIN)
        self.assertEqual(
            ctx.exception.message,
            "New password must be different from the current password.",
        )
        self.repository.save.assert_not_called()

    def test_same_password_checked_before_confirmation(self) -> None:
        form = self._form("password123", "password123", "somethingElse")
        with self.assertRaises(PasswordPolicyError):
            self.service.change_password(form, caller_authorities=NON_ADMIN)

    def test_current_password_checked_before_same_password(self) -> None:
        form = self._form("wrong", "password123", "password123")
        with self.assertRaises(InvalidCredentialError):
            self.service.change_password(form, caller_authorities=NON_ADMIN)

    def test_admin_same_password_rejected(self) -> None:
        form = self._form("anything", "password123", "password123")
        with self.assertRaises(PasswordPolicyError):
            self.service.change_password(form, caller_authorities=ADMIN)

    def test_new_password_mismatch(self) -> None:
        form = self._form("password123", "newPassword456", "differentPassword")
        with self.assertRaises(PasswordMismatchError) as ctx:
            self.service.change_password(form, caller_authorities=NON_ADMIN)
        self.assertEqual(ctx.exception.message, "New Password and Confirm Password do not match.")
        self.encoder.assert_not_called()
        self.repository.save.assert_not_called()

    def test_user_not_found(self) -> None:
        self.repository.find_by_id.return_value = None
        with self.assertRaises(UsernameOrIdNotFoundError):
            self.service.change_password(self._form(None, None, None, user_id=999), caller_authorities=ADMIN)
        self.repository.find_by_id.assert_called_once_with(999)
        self.encoder.assert_not_called()
        self.repository.save.assert_not_called()


class TestAdminAuthorityDefault(unittest.TestCase):
    """Without an explicit admin_authority the configured ADMIN_AUTHORITY is used."""

    def test_defaults_to_settings(self) -> None:
        from usermanagement.core.config import settings

        service = UserService(MagicMock())
        self.assertEqual(service.admin_authority, settings.ADMIN_AUTHORITY)
        self.assertTrue(service.is_admin({settings.ADMIN_AUTHORITY}))
        self.assertFalse(service.is_admin(set()))


if __name__ == "__main__":
    unittest.main()
