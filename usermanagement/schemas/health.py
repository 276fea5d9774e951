"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status, user store reachability, schema completeness and seeded roles."""

    status: Literal["ok", "degraded"] = Field(
        default="ok",
        description="'degraded' when the database is unreachable or not migrated",
    )
    service: str = Field(default="usermanagement", description="Service name")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether the user database could be inspected",
    )
    missing_tables: list[str] = Field(
        default_factory=list,
        description="Required tables not found (users, roles, user_roles)",
    )
    roles: list[str] = Field(
        default_factory=list,
        description="Names of the roles available for assignment",
    )
