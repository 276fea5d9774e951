"""Health of the user store: reachable, migrated, and which roles are seeded."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from usermanagement.core.config import settings
from usermanagement.core.database import find_missing_tables, get_db
from usermanagement.repositories import RoleRepository
from usermanagement.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """
    Report 'ok' only when the database answers and every user table exists.

    Role names are listed once the schema is complete so an empty list points
    at a missing seed rather than a missing table.
    """
    missing = find_missing_tables(db)
    if missing is None:
        return HealthResponse(
            status="degraded",
            environment=settings.APP_ENV,
            database="disconnected",
        )
    role_names = [] if missing else [r.name for r in RoleRepository(db).find_all()]
    return HealthResponse(
        status="degraded" if missing else "ok",
        environment=settings.APP_ENV,
        database="connected",
        missing_tables=missing,
        roles=role_names,
    )
