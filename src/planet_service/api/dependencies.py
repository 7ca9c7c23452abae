"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from loguru import logger

from planet_service.config import Settings, get_settings
from planet_service.errors import CacheError
from planet_service.handlers import PlanetHandler
from planet_service.log_config import configure_logging
from planet_service.protocols import CacheStore, PlanetStore
from planet_service.repositories import PostgresPlanetRepository, RedisCacheRepository
from planet_service.services import PlanetService, RateLimiter


def get_handler(request: Request) -> PlanetHandler:
    """Dependency injection for PlanetHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "planet_handler", None)
    if handler is None:
        raise RuntimeError("PlanetHandler not initialized. Check lifespan setup.")
    return handler


def install_services(
    app: FastAPI,
    store: PlanetStore,
    cache: CacheStore,
    config: Settings,
) -> None:
    """Build the service graph on top of connected backends and store it in app.state.

    Args:
        app: The FastAPI application instance
        store: Connected record store
        cache: Connected cache store
        config: Settings providing TTL and rate limit parameters
    """
    planet_service = PlanetService.create(store=store, cache=cache, ttl=config.cache_ttl)

    app.state.settings = config
    app.state.store = store
    app.state.cache = cache
    app.state.planet_service = planet_service
    app.state.planet_handler = PlanetHandler(planet_service=planet_service)
    app.state.rate_limiter = RateLimiter.create(
        cache=cache,
        limit=config.rate_limit_requests,
        window_seconds=config.rate_limit_window,
    )


def uninstall_services(app: FastAPI) -> None:
    """Remove everything ``install_services`` placed in app.state."""
    for name in ("planet_handler", "planet_service", "rate_limiter", "cache", "store", "settings"):
        if hasattr(app.state, name):
            delattr(app.state, name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Startup order:
    1. Record store - connect and create the table (fatal on failure)
    2. Cache - require REDIS_ADDR and ping (fatal on failure)
    3. Services, handler and rate limiter stored in app.state

    Cleanup:
        Closes both backends and removes all services from app.state,
        also when startup fails part way or the app exits with an error
    """
    config = get_settings()
    configure_logging(config.log_level)

    if not config.redis_addr:
        raise CacheError("REDIS_ADDR is not set")

    store = PostgresPlanetRepository.create(config)
    await store.connect()
    try:
        await store.ensure_schema()

        cache = RedisCacheRepository.create(config)
        if not await cache.ping():
            await cache.close()
            raise CacheError(f"could not connect to redis at {config.redis_addr}")
        logger.info("Connected to Redis at {}", config.redis_addr)
    except Exception:
        await store.close()
        raise

    install_services(app, store=store, cache=cache, config=config)
    logger.info(
        "Planet service ready (cache ttl={}s, rate limit={}/{}s)",
        config.cache_ttl,
        config.rate_limit_requests,
        config.rate_limit_window,
    )

    try:
        yield
    finally:
        uninstall_services(app)
        try:
            await cache.close()
        finally:
            await store.close()
        logger.info("Planet service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[PlanetHandler, Depends(get_handler)]
