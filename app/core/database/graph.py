from __future__ import annotations

from typing import Optional

import structlog
from neo4j import AsyncDriver, AsyncGraphDatabase

from app.core.config import settings

log = structlog.get_logger(__name__)


class GraphDatabase:
    """
    Holds the process-wide Neo4j async driver (and with it the connection pool).
    Opened and closed by the application lifespan.
    """

    def __init__(self) -> None:
        self._driver: Optional[AsyncDriver] = None

    async def init(self, verify: bool = True) -> None:
        auth = (settings.neo_user, settings.neo_password) if settings.neo_user else None
        self._driver = AsyncGraphDatabase.driver(settings.neo_url, auth=auth)
        if not verify:
            return
        try:
            await self._driver.verify_connectivity()
        except Exception as e:
            await self.close()
            # Re-raise so FastAPI startup fails visibly
            raise RuntimeError(f"Error connecting to neo4j at {settings.neo_url}: {e}") from e
        log.info("connected to neo4j", neo_url=settings.neo_url)

    async def close(self) -> None:
        if self._driver is not None:
            await self._driver.close()
            self._driver = None

    @property
    def driver(self) -> AsyncDriver:
        if self._driver is None:
            raise RuntimeError("neo4j driver not initialised")
        return self._driver


graph_db = GraphDatabase()


def get_driver() -> AsyncDriver:
    return graph_db.driver
