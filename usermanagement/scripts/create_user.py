"""
Create a user (e.g. first admin). Run from project root:
  python -m usermanagement.scripts.create_user USERNAME PASSWORD [--role NAME ...]
Example:
  python -m usermanagement.scripts.create_user admin your-secure-password --role ADMIN --role USER
"""
import argparse
import sys

from usermanagement.core.database import SessionLocal
from usermanagement.core.security import USERNAME_MAX_LEN, USERNAME_MIN_LEN
from usermanagement.models import User
from usermanagement.repositories import RoleRepository, UserRepository
from usermanagement.services.exceptions import UserManagementError
from usermanagement.services.user_service import UserService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a user account.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help="Password")
    parser.add_argument(
        "--role",
        dest="roles",
        action="append",
        default=[],
        help="Role name to grant (repeatable), e.g. ADMIN or USER",
    )
    parser.add_argument("--email", default=None)
    parser.add_argument("--first-name", dest="first_name", default=None)
    parser.add_argument("--last-name", dest="last_name", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        roles = RoleRepository(db).find_by_names(args.roles)
        missing = {r.strip().upper() for r in args.roles} - {r.name for r in roles}
        if missing:
            print(f"Unknown role(s): {', '.join(sorted(missing))}", file=sys.stderr)
            return 1

        user = User(
            username=username,
            password=args.password,
            email=args.email,
            first_name=args.first_name,
            last_name=args.last_name,
            roles=set(roles),
        )
        user.confirm_password = args.password
        try:
            created = UserService(UserRepository(db)).create_user(user)
        except UserManagementError as e:
            print(e.message, file=sys.stderr)
            return 1
        granted = ", ".join(sorted(r.name for r in created.roles)) or "none"
        print(f"Created user '{created.username}' with roles: {granted}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
