"""
User Repository

Handles all database operations for the users table.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from usermanagement.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user data access. Each save/delete commits on its own."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_username(self, username: str | None) -> User | None:
        """Get user by username (None matches nothing)."""
        return self.session.query(User).filter(User.username == username).first()

    def find_by_id(self, user_id: int | None) -> User | None:
        """Get user by ID."""
        if user_id is None:
            return None
        return self.session.get(User, user_id)

    def find_all(self) -> list[User]:
        """Return every user ordered by id."""
        return self.session.query(User).order_by(User.id).all()

    def save(self, user: User) -> User:
        """
        Insert or update a user and return the refreshed row.

        A failed commit (e.g. a taken username hitting the unique index) is
        rolled back so the session stays usable, then re-raised.
        """
        self.session.add(user)
        self._commit("save")
        self.session.refresh(user)
        logger.debug("Saved user id=%s", user.id)
        return user

    def delete(self, user: User) -> None:
        """Delete a user; role links go with it."""
        user_id = user.id
        self.session.delete(user)
        self._commit("delete")
        logger.debug("Deleted user id=%s", user_id)

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.warning("User %s failed; session rolled back", action)
            raise
