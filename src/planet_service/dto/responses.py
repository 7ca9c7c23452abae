"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class PlanetResponse(BaseModel):
    """A single planet."""

    id: int = Field(..., description="Primary key assigned by the store")
    name: str = Field(..., description="The planet's name")


class PlanetCreatedResponse(BaseModel):
    """Response DTO for POST /."""

    message: str = Field(..., description="Human-readable status message")
    inserted_id: int = Field(..., description="Primary key assigned to the new planet")
    name: str = Field(..., description="The stored name")


class PlanetUpdatedResponse(BaseModel):
    """Response DTO for PUT /{id}.

    ``id`` echoes the path parameter as a string.
    """

    message: str = Field(..., description="Human-readable status message")
    id: str = Field(..., description="The updated planet's id, as given in the path")
    name: str = Field(..., description="The new name")


class PlanetDeletedResponse(BaseModel):
    """Response DTO for DELETE /{id}."""

    message: str = Field(..., description="Human-readable status message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether the record store is reachable")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
