"""Record store protocol.

The store of record for planets. Unlike the cache, failures here are
never absorbed: implementations raise ``StoreError`` for query or
connectivity failures and ``PlanetNotFoundError`` when no row matches.
"""

from typing import Protocol, runtime_checkable

from planet_service.entities import PlanetEntity


@runtime_checkable
class PlanetStore(Protocol):
    """Protocol for the durable planet table."""

    async def ensure_schema(self) -> None:
        """Create the planets table if it does not exist."""
        ...

    async def list_all(self) -> list[PlanetEntity]:
        """Return every planet ordered by id."""
        ...

    async def get(self, planet_id: int) -> PlanetEntity:
        """Return the planet with ``planet_id``.

        Raises:
            PlanetNotFoundError: If no row matches
            StoreError: On any other failure
        """
        ...

    async def add(self, name: str) -> PlanetEntity:
        """Insert a planet and return it with its assigned id."""
        ...

    async def update(self, planet_id: int, name: str) -> PlanetEntity:
        """Rename a planet in place.

        Raises:
            PlanetNotFoundError: If zero rows were affected
            StoreError: On any other failure
        """
        ...

    async def delete(self, planet_id: int) -> None:
        """Physically delete a planet.

        Raises:
            PlanetNotFoundError: If zero rows were affected
            StoreError: On any other failure
        """
        ...

    async def ping(self) -> bool:
        """Check if the store is reachable."""
        ...

    async def close(self) -> None:
        """Release store connections."""
        ...
