"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from usermanagement.models.base import Base
from usermanagement.models.role import user_roles


class User(Base):
    """
    User account with its set of roles.

    password holds the bcrypt hash. confirm_password is a plain attribute, not
    a column: it only carries form input for create-time validation and is
    never persisted.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)

    roles = relationship("Role", secondary=user_roles, collection_class=set, lazy="selectin")

    confirm_password = None

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r})"
