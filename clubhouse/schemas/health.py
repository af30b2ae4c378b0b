"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus database reachability."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    service: str = Field(default="clubhouse", description="Service name")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Whether the users/sessions database answered a trivial query",
    )
