"""HTTP handlers for planet operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error responses.
"""

from fastapi import HTTPException, status

from planet_service.dto import (
    HealthCheckResponse,
    PlanetCreatedResponse,
    PlanetDeletedResponse,
    PlanetRequest,
    PlanetResponse,
    PlanetUpdatedResponse,
)
from planet_service.entities import PlanetEntity
from planet_service.errors import PlanetNotFoundError, StoreError
from planet_service.services import PlanetService


def _to_response(planet: PlanetEntity) -> PlanetResponse:
    return PlanetResponse(id=planet.id, name=planet.name)


class PlanetHandler:
    """HTTP handlers for planet CRUD.

    This handler delegates business logic to PlanetService and maps
    domain errors to status codes:
    - ``PlanetNotFoundError`` -> 404
    - ``StoreError`` -> 400 for reads and creates, 500 for updates and deletes

    A string ``detail`` is rendered as ``{"error": detail}``; store failures
    on list, get and create pass a ready ``{"error message": ...}`` body.

    Example:
        ```python
        handler = PlanetHandler(planet_service=service)

        @app.get("/{planet_id}", response_model=PlanetResponse)
        async def get_planet(planet_id: int):
            return await handler.get_planet(planet_id)
        ```
    """

    def __init__(self, planet_service: PlanetService) -> None:
        """Initialize the planet handler.

        Args:
            planet_service: The planet service for business logic (required).
        """
        self._planets = planet_service

    async def list_planets(self) -> list[PlanetResponse]:
        """Handle GET / requests."""
        try:
            planets = await self._planets.list_all()
        except StoreError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error message": "error selecting planets"},
            ) from e
        return [_to_response(p) for p in planets]

    async def get_planet(self, planet_id: int) -> PlanetResponse:
        """Handle GET /{planet_id} requests.

        Raises:
            HTTPException: 404 if the planet does not exist, 400 on store failure
        """
        try:
            planet = await self._planets.get(planet_id)
        except PlanetNotFoundError as e:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="planet not found",
            ) from e
        except StoreError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error message": "error scanning planet by id"},
            ) from e
        return _to_response(planet)

    async def create_planet(self, request: PlanetRequest) -> PlanetCreatedResponse:
        """Handle POST / requests.

        Raises:
            HTTPException: 400 if the insert fails
        """
        try:
            planet = await self._planets.add(request.name)
        except StoreError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error message": "error adding a planet"},
            ) from e
        return PlanetCreatedResponse(
            message="planet added succesfully",
            inserted_id=planet.id,
            name=planet.name,
        )

    async def update_planet(self, planet_id: int, request: PlanetRequest) -> PlanetUpdatedResponse:
        """Handle PUT /{planet_id} requests.

        Raises:
            HTTPException: 404 if the planet does not exist, 500 on store failure
        """
        try:
            planet = await self._planets.update(planet_id, request.name)
        except PlanetNotFoundError as e:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Planet not found",
            ) from e
        except StoreError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error updating",
            ) from e
        return PlanetUpdatedResponse(
            message="Planet updated",
            id=str(planet.id),
            name=planet.name,
        )

    async def delete_planet(self, planet_id: int) -> PlanetDeletedResponse:
        """Handle DELETE /{planet_id} requests.

        Raises:
            HTTPException: 404 if the planet does not exist, 500 on store failure
        """
        try:
            await self._planets.delete(planet_id)
        except PlanetNotFoundError as e:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Planet not found",
            ) from e
        except StoreError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="error deleting planet",
            ) from e
        return PlanetDeletedResponse(message="Planeted deleted")

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        health = await self._planets.is_healthy()
        healthy = health["store"] and health["cache"]
        return HealthCheckResponse(
            status="healthy" if healthy else "unhealthy",
            store_healthy=health["store"],
            cache_healthy=health["cache"],
        )
