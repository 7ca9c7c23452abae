"""PostgreSQL implementation of PlanetStore.

Backed by an asyncpg connection pool. Driver and connectivity failures
are wrapped in ``StoreError``; zero matched or affected rows raise
``PlanetNotFoundError``.
"""

import asyncio

import asyncpg
from loguru import logger

from planet_service.config import Settings, settings
from planet_service.entities import PlanetEntity
from planet_service.errors import PlanetNotFoundError, StoreError

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS planets (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL
);
"""

DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


def _affected_rows(status: str) -> int:
    """Extract the row count from a command tag such as ``UPDATE 1``."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except ValueError:
        return 0


class PostgresPlanetRepository:
    """Planet table stored in PostgreSQL.

    This class satisfies the PlanetStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
        command_timeout: float | None = None,
    ) -> None:
        """Initialize the repository. Call ``connect()`` before use.

        Args:
            dsn: PostgreSQL connection string
            min_size: Minimum pool size
            max_size: Maximum pool size
            command_timeout: Per-query timeout in seconds
        """
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def create(cls, config: Settings | None = None) -> "PostgresPlanetRepository":
        """Factory method to create PostgresPlanetRepository from settings.

        Args:
            config: Settings to read connection details from. If None, uses settings.

        Returns:
            Unconnected PostgresPlanetRepository
        """
        config = config or settings
        return cls(
            dsn=config.database_dsn,
            min_size=config.db_pool_min_size,
            max_size=config.db_pool_max_size,
            command_timeout=config.db_command_timeout,
        )

    async def connect(self) -> None:
        """Open the connection pool.

        Raises:
            StoreError: If the database is unreachable
        """
        try:
            self._pool = await asyncpg.create_pool(
                self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
        except DRIVER_ERRORS as e:
            raise StoreError(f"could not connect to database: {e}") from e
        logger.info("Connected to PostgreSQL")

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StoreError("database pool is not connected")
        return self._pool

    async def ensure_schema(self) -> None:
        try:
            await self.pool.execute(CREATE_TABLE_SQL)
        except DRIVER_ERRORS as e:
            raise StoreError(f"error creating table: {e}") from e
        logger.info("planets table ready")

    async def list_all(self) -> list[PlanetEntity]:
        try:
            rows = await self.pool.fetch("SELECT id, name FROM planets ORDER BY id")
        except DRIVER_ERRORS as e:
            logger.error("Error selecting planets: {}", e)
            raise StoreError("error selecting planets") from e
        return [PlanetEntity(id=row["id"], name=row["name"]) for row in rows]

    async def get(self, planet_id: int) -> PlanetEntity:
        try:
            row = await self.pool.fetchrow("SELECT id, name FROM planets WHERE id = $1", planet_id)
        except DRIVER_ERRORS as e:
            logger.error("Error selecting planet {}: {}", planet_id, e)
            raise StoreError("error selecting planet by id") from e
        if row is None:
            raise PlanetNotFoundError(planet_id)
        return PlanetEntity(id=row["id"], name=row["name"])

    async def add(self, name: str) -> PlanetEntity:
        try:
            planet_id = await self.pool.fetchval(
                "INSERT INTO planets (name) VALUES ($1) RETURNING id", name
            )
        except DRIVER_ERRORS as e:
            logger.error("Error adding planet: {}", e)
            raise StoreError("error adding a planet") from e
        return PlanetEntity(id=planet_id, name=name)

    async def update(self, planet_id: int, name: str) -> PlanetEntity:
        try:
            status = await self.pool.execute(
                "UPDATE planets SET name = $1 WHERE id = $2", name, planet_id
            )
        except DRIVER_ERRORS as e:
            logger.error("Error updating planet {}: {}", planet_id, e)
            raise StoreError("error updating planet") from e
        if _affected_rows(status) == 0:
            raise PlanetNotFoundError(planet_id)
        return PlanetEntity(id=planet_id, name=name)

    async def delete(self, planet_id: int) -> None:
        try:
            status = await self.pool.execute("DELETE FROM planets WHERE id = $1", planet_id)
        except DRIVER_ERRORS as e:
            logger.error("Error deleting planet {}: {}", planet_id, e)
            raise StoreError("error deleting planet") from e
        if _affected_rows(status) == 0:
            raise PlanetNotFoundError(planet_id)

    async def ping(self) -> bool:
        """Check if PostgreSQL is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return await self.pool.fetchval("SELECT 1") == 1
        except (StoreError, *DRIVER_ERRORS) as e:
            logger.warning("PostgreSQL ping failed: {}", e)
            return False

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
