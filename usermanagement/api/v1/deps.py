"""Service dependencies built per request from the DB session."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from usermanagement.core.database import get_db
from usermanagement.repositories import RoleRepository, UserRepository
from usermanagement.services.authentication import (
    AuthenticationProvider,
    build_authentication_provider,
)
from usermanagement.services.user_details import UserDetailsService
from usermanagement.services.user_service import UserService


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_role_repository(db: Annotated[Session, Depends(get_db)]) -> RoleRepository:
    return RoleRepository(db)


def get_user_service(
    repository: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserService:
    return UserService(repository)


def get_user_details_service(
    repository: Annotated[UserRepository, Depends(get_user_repository)],
) -> UserDetailsService:
    return UserDetailsService(repository)


def get_authentication_provider(
    db: Annotated[Session, Depends(get_db)],
) -> AuthenticationProvider:
    return build_authentication_provider(db)
