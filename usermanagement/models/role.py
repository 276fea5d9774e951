"""ORM model for roles and the user/role association table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table

from usermanagement.models.base import Base

# Prefix the authentication layer expects on every authority token.
AUTHORITY_PREFIX = "ROLE_"

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


def role_authority(name: str) -> str:
    """Return the conventional authority token for a role name (ADMIN -> ROLE_ADMIN)."""
    return f"{AUTHORITY_PREFIX}{name.strip().upper()}"


class Role(Base):
    """
    Named grouping that grants one authority token to each of its users.

    description holds the authority token itself (e.g. 'ROLE_ADMIN'). It is
    stored independently of name and read verbatim when resolving authorities.
    """

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True, index=True)
    description = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"Role(id={self.id!r}, name={self.name!r}, description={self.description!r})"
