"""Read-only listing of the seeded roles."""

from typing import Annotated

from fastapi import APIRouter, Depends

from usermanagement.api.v1.auth import get_current_principal
from usermanagement.api.v1.deps import get_role_repository
from usermanagement.repositories import RoleRepository
from usermanagement.schemas.auth import Principal
from usermanagement.schemas.users import RoleResponse, RolesListResponse

router = APIRouter()


@router.get("", response_model=RolesListResponse)
def list_roles(
    _principal: Annotated[Principal, Depends(get_current_principal)],
    roles: Annotated[RoleRepository, Depends(get_role_repository)],
) -> RolesListResponse:
    """List roles available for assignment."""
    return RolesListResponse(roles=[RoleResponse.model_validate(r) for r in roles.find_all()])
