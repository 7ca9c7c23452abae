"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import PlanetRequest
from .responses import (
    HealthCheckResponse,
    PlanetCreatedResponse,
    PlanetDeletedResponse,
    PlanetResponse,
    PlanetUpdatedResponse,
)

__all__ = [
    "PlanetRequest",
    "PlanetResponse",
    "PlanetCreatedResponse",
    "PlanetUpdatedResponse",
    "PlanetDeletedResponse",
    "HealthCheckResponse",
]
