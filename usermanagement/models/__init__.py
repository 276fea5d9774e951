"""SQLAlchemy ORM models."""

from usermanagement.models.base import Base
from usermanagement.models.role import Role, role_authority, user_roles
from usermanagement.models.user import User

__all__ = ["Base", "Role", "User", "role_authority", "user_roles"]
