"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field, StrictStr


class PlanetRequest(BaseModel):
    """Request DTO for creating or renaming a planet."""

    name: StrictStr = Field(..., description="The planet's name", min_length=1)
