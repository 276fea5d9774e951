"""Read access to the pre-seeded roles table."""

from collections.abc import Iterable

from sqlalchemy.orm import Session

from usermanagement.models import Role


class RoleRepository:
    """Roles are referenced by users, never created through the API."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_all(self) -> list[Role]:
        return self.session.query(Role).order_by(Role.id).all()

    def find_by_ids(self, role_ids: Iterable[int]) -> list[Role]:
        """Return the roles whose id is in role_ids; unknown ids are skipped."""
        ids = set(role_ids)
        if not ids:
            return []
        return self.session.query(Role).filter(Role.id.in_(ids)).order_by(Role.id).all()

    def find_by_names(self, names: Iterable[str]) -> list[Role]:
        wanted = {n.strip().upper() for n in names}
        if not wanted:
            return []
        return self.session.query(Role).filter(Role.name.in_(wanted)).order_by(Role.id).all()
