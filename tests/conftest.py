"""Shared fixtures: in-memory implementations of the store protocols."""

import json
from collections import Counter
from contextlib import asynccontextmanager
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from planet_service.api.app import create_app
from planet_service.api.dependencies import install_services, uninstall_services
from planet_service.config import Settings
from planet_service.entities import PlanetEntity
from planet_service.errors import PlanetNotFoundError, StoreError


class FakeClock:
    """Manually advanced clock for TTL expiry."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryPlanetStore:
    """PlanetStore backed by a dict; counts calls and can be switched off."""

    def __init__(self, events: list[str] | None = None) -> None:
        self.rows: dict[int, str] = {}
        self.calls: Counter[str] = Counter()
        self.available = True
        self.events = events if events is not None else []
        self._next_id = 1

    def _check(self, operation: str) -> None:
        self.calls[operation] += 1
        if not self.available:
            raise StoreError(f"store unavailable during {operation}")

    async def ensure_schema(self) -> None:
        self._check("ensure_schema")

    async def list_all(self) -> list[PlanetEntity]:
        self._check("list_all")
        return [PlanetEntity(id=i, name=n) for i, n in sorted(self.rows.items())]

    async def get(self, planet_id: int) -> PlanetEntity:
        self._check("get")
        if planet_id not in self.rows:
            raise PlanetNotFoundError(planet_id)
        return PlanetEntity(id=planet_id, name=self.rows[planet_id])

    async def add(self, name: str) -> PlanetEntity:
        self._check("add")
        planet_id = self._next_id
        self._next_id += 1
        self.rows[planet_id] = name
        self.events.append(f"store.add:{planet_id}")
        return PlanetEntity(id=planet_id, name=name)

    async def update(self, planet_id: int, name: str) -> PlanetEntity:
        self._check("update")
        if planet_id not in self.rows:
            raise PlanetNotFoundError(planet_id)
        self.rows[planet_id] = name
        self.events.append(f"store.update:{planet_id}")
        return PlanetEntity(id=planet_id, name=name)

    async def delete(self, planet_id: int) -> None:
        self._check("delete")
        if planet_id not in self.rows:
            raise PlanetNotFoundError(planet_id)
        del self.rows[planet_id]
        self.events.append(f"store.delete:{planet_id}")

    async def ping(self) -> bool:
        return self.available

    async def close(self) -> None:
        pass


class InMemoryCacheStore:
    """CacheStore with JSON values and TTL on a fake clock.

    Mirrors the Redis repository's contract: when ``available`` is False
    every operation reports a miss or failure instead of raising.
    """

    def __init__(self, clock: FakeClock, events: list[str] | None = None) -> None:
        self.clock = clock
        self.available = True
        self.events = events if events is not None else []
        self._data: dict[str, tuple[str, float | None]] = {}

    def _live(self, key: str) -> tuple[str, float | None] | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        expires_at = entry[1]
        if expires_at is not None and expires_at <= self.clock():
            del self._data[key]
            return None
        return entry

    def put_raw(self, key: str, raw: str) -> None:
        self._data[key] = (raw, None)

    def contains(self, key: str) -> bool:
        return self._live(key) is not None

    async def get(self, key: str) -> Any | None:
        if not self.available:
            return None
        entry = self._live(key)
        if entry is None:
            return None
        try:
            return json.loads(entry[0])
        except json.JSONDecodeError:
            return None

    async def set(self, key: str, value: Any, ttl: int) -> bool:
        if not self.available:
            return False
        self._data[key] = (json.dumps(value), self.clock() + ttl)
        return True

    async def delete(self, *keys: str) -> bool:
        if not self.available:
            return False
        for key in keys:
            self._data.pop(key, None)
            self.events.append(f"cache.delete:{key}")
        return True

    async def increment_window(self, key: str, window_seconds: int) -> int | None:
        if not self.available:
            return None
        entry = self._live(key)
        if entry is None:
            self._data[key] = ("1", self.clock() + window_seconds)
            return 1
        count = int(entry[0]) + 1
        self._data[key] = (str(count), entry[1])
        return count

    async def ping(self) -> bool:
        return self.available

    async def close(self) -> None:
        pass


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def planet_store(events) -> InMemoryPlanetStore:
    return InMemoryPlanetStore(events)


@pytest.fixture
def cache_store(clock, events) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock, events)


def _build_app(store, cache, config: Settings) -> FastAPI:
    """Application wired to the given stores instead of PostgreSQL and Redis."""

    @asynccontextmanager
    async def in_memory_lifespan(app: FastAPI):
        install_services(app, store=store, cache=cache, config=config)
        yield
        uninstall_services(app)

    return create_app(in_memory_lifespan)


@pytest.fixture
def client(planet_store, cache_store):
    """Test client with a rate limit high enough not to interfere."""
    config = Settings(redis_addr="localhost:6379", cache_ttl=300, rate_limit_requests=1_000)
    with TestClient(_build_app(planet_store, cache_store, config)) as test_client:
        yield test_client


@pytest.fixture
def app_factory(planet_store, cache_store):
    """Build an app over the shared in-memory stores with custom settings."""

    def factory(config: Settings) -> FastAPI:
        return _build_app(planet_store, cache_store, config)

    return factory
