"""Planet service for core business logic.

This service orchestrates the record store (source of truth) and the
cache store (read-through accelerator, invalidated on writes).
"""

from loguru import logger

from planet_service.config import settings
from planet_service.entities import PlanetEntity
from planet_service.protocols import CacheStore, PlanetStore

ALL_PLANETS_KEY = "planet:all"


def planet_key(planet_id: int) -> str:
    """Cache key for a single planet."""
    return f"planet:{planet_id}"


class PlanetService:
    """Cache-aside CRUD over planets.

    Reads consult the cache first and fall back to the store, populating
    the cache on a miss. Writes go to the store and then invalidate the
    affected keys before returning, so no caller sees a success response
    while the cache still holds the pre-write value.

    Two error channels are kept apart:
    - Store errors (``StoreError``, ``PlanetNotFoundError``) propagate.
    - Cache errors never reach this layer; the cache store absorbs them
      and reports misses.

    Example:
        ```python
        from planet_service.repositories import PostgresPlanetRepository, RedisCacheRepository
        from planet_service.services import PlanetService

        service = PlanetService.create(
            store=PostgresPlanetRepository.create(),
            cache=RedisCacheRepository.create(),
        )
        planet = await service.get(1)
        ```
    """

    def __init__(
        self,
        store: PlanetStore,
        cache: CacheStore,
        ttl: int | None = None,
    ) -> None:
        """Initialize the planet service.

        Args:
            store: Record store of truth (required).
            cache: Cache backend (required).
            ttl: Time-to-live for cache entries in seconds. Defaults to settings.
        """
        self._store = store
        self._cache = cache
        self._ttl = ttl or settings.cache_ttl

    @classmethod
    def create(
        cls,
        store: PlanetStore,
        cache: CacheStore,
        ttl: int | None = None,
    ) -> "PlanetService":
        """Factory method to create PlanetService with sensible defaults.

        Args:
            store: Record store of truth (required).
            cache: Cache backend (required).
            ttl: Time-to-live in seconds. If None, uses settings.

        Returns:
            Configured PlanetService instance
        """
        return cls(store=store, cache=cache, ttl=ttl)

    async def list_all(self) -> list[PlanetEntity]:
        """Return all planets.

        Business logic:
        1. Look up ``planet:all`` in the cache
        2. On a miss, read every row from the store
        3. Populate ``planet:all`` and return the fresh rows

        Raises:
            StoreError: If the store cannot be queried
        """
        cached = await self._cache.get(ALL_PLANETS_KEY)
        if cached is not None:
            try:
                return [PlanetEntity.from_dict(item) for item in cached]
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Ignoring malformed cache entry {}: {}", ALL_PLANETS_KEY, e)

        planets = await self._store.list_all()
        await self._cache.set(ALL_PLANETS_KEY, [p.to_dict() for p in planets], self._ttl)
        return planets

    async def get(self, planet_id: int) -> PlanetEntity:
        """Return a single planet, read through the cache.

        Raises:
            PlanetNotFoundError: If no planet has ``planet_id``
            StoreError: If the store cannot be queried
        """
        key = planet_key(planet_id)
        cached = await self._cache.get(key)
        if cached is not None:
            try:
                return PlanetEntity.from_dict(cached)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Ignoring malformed cache entry {}: {}", key, e)

        planet = await self._store.get(planet_id)
        await self._cache.set(key, planet.to_dict(), self._ttl)
        return planet

    async def add(self, name: str) -> PlanetEntity:
        """Insert a planet and invalidate the collection key.

        The new planet is not cached individually; its first ``get`` populates it.

        Raises:
            StoreError: If the insert fails
        """
        planet = await self._store.add(name)
        await self._cache.delete(ALL_PLANETS_KEY)
        return planet

    async def update(self, planet_id: int, name: str) -> PlanetEntity:
        """Rename a planet and invalidate its key and the collection key.

        Raises:
            PlanetNotFoundError: If no planet has ``planet_id``
            StoreError: If the update fails
        """
        planet = await self._store.update(planet_id, name)
        await self._invalidate(planet_id)
        return planet

    async def delete(self, planet_id: int) -> None:
        """Delete a planet and invalidate its key and the collection key.

        Raises:
            PlanetNotFoundError: If no planet has ``planet_id``
            StoreError: If the delete fails
        """
        await self._store.delete(planet_id)
        await self._invalidate(planet_id)

    async def _invalidate(self, planet_id: int) -> None:
        # Failures are logged by the cache store; the entry then expires by TTL.
        await self._cache.delete(planet_key(planet_id))
        await self._cache.delete(ALL_PLANETS_KEY)

    async def is_healthy(self) -> dict[str, bool]:
        """Probe both backends.

        Returns:
            Mapping with ``store`` and ``cache`` reachability
        """
        return {
            "store": await self._store.ping(),
            "cache": await self._cache.ping(),
        }

    @property
    def ttl(self) -> int:
        """Get the cache entry time-to-live in seconds."""
        return self._ttl

    @property
    def store(self) -> PlanetStore:
        """Get the underlying record store (for testing)."""
        return self._store

    @property
    def cache(self) -> CacheStore:
        """Get the underlying cache store (for testing)."""
        return self._cache
