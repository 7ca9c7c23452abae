"""Planet Service - CRUD API with read-through caching and rate limiting.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (PlanetStore, CacheStore)
    - repositories: Data access implementations (PostgreSQL, Redis)
    - services: Business logic (PlanetService, RateLimiter)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from planet_service.repositories import PostgresPlanetRepository, RedisCacheRepository
    from planet_service.services import PlanetService

    store = PostgresPlanetRepository.create()
    await store.connect()
    service = PlanetService.create(store=store, cache=RedisCacheRepository.create())
    ```

For HTTP API:
    ```python
    from planet_service.api.app import app
    ```
"""

from planet_service.config import get_redis_client, settings
from planet_service.dto import PlanetRequest, PlanetResponse
from planet_service.entities import PlanetEntity
from planet_service.errors import CacheError, PlanetNotFoundError, PlanetServiceError, StoreError
from planet_service.handlers import PlanetHandler
from planet_service.protocols import CacheStore, PlanetStore
from planet_service.repositories import PostgresPlanetRepository, RedisCacheRepository
from planet_service.services import PlanetService, RateLimiter

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Errors
    "PlanetServiceError",
    "PlanetNotFoundError",
    "StoreError",
    "CacheError",
    # Protocols (interfaces)
    "PlanetStore",
    "CacheStore",
    # Services (business logic)
    "PlanetService",
    "RateLimiter",
    # Handlers (HTTP)
    "PlanetHandler",
    # Repositories (data access)
    "PostgresPlanetRepository",
    "RedisCacheRepository",
    # Entities (domain models)
    "PlanetEntity",
    # DTOs (API contracts)
    "PlanetRequest",
    "PlanetResponse",
]
