"""Data access over SQLAlchemy sessions."""

from usermanagement.repositories.role_repository import RoleRepository
from usermanagement.repositories.user_repository import UserRepository

__all__ = ["RoleRepository", "UserRepository"]
