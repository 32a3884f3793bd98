# content/adapters/outbound/lookup_neo4j.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import structlog
from neo4j import AsyncDriver, Query
from neo4j.exceptions import DriverError, Neo4jError

from app.core.config import settings
from content.adapters.outbound.transformers import to_content_item
from content.domain.entities.lookup import LookupRequest
from content.ports.outbound.content_lookup_port import ContentLookupError, ContentLookupPort
from shared.entities.content import ContentItem

log = structlog.get_logger(__name__)

# Zero epoch bounds leave that side of the window open.
CONTENT_BY_CONCEPT_QUERY = """
MATCH (:Thing {uuid: $conceptUUID})<-[:MENTIONS|MAJOR_MENTIONS|ABOUT|IS_CLASSIFIED_BY|IS_PRIMARILY_CLASSIFIED_BY|HAS_AUTHOR]-(c:Content)
WHERE ($fromDate = 0 OR c.publishedDateEpoch >= $fromDate)
  AND ($toDate = 0 OR c.publishedDateEpoch <= $toDate)
WITH DISTINCT c
RETURN c.uuid AS uuid
ORDER BY c.publishedDateEpoch DESC
LIMIT $limit
"""

CONNECTIVITY_QUERY = "RETURN 1"


class Neo4jContentLookupAdapter(ContentLookupPort):
    """
    Neo4j implementation of ContentLookupPort.

    Graph assumptions:
      - concepts are :Thing nodes keyed by `uuid`
      - content is :Content with `uuid` and `publishedDateEpoch` (Unix seconds)
      - annotations point from content to concept

    The limit goes to Cypher's LIMIT untouched: 0 yields no rows (not found),
    a negative value is rejected by Neo4j and raised as ContentLookupError.
    """

    def __init__(
        self,
        driver: AsyncDriver,
        env: Optional[str] = None,
        database: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.driver = driver
        self.env = env if env is not None else settings.env
        self.database = database if database is not None else settings.neo_database
        self.timeout = timeout if timeout is not None else settings.neo_query_timeout

    @staticmethod
    def parameters(request: LookupRequest) -> Dict[str, Any]:
        return {
            "conceptUUID": request.concept_id,
            "limit": request.limit,
            "fromDate": request.from_date_epoch,
            "toDate": request.to_date_epoch,
        }

    async def _run(self, text: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        async with self.driver.session(database=self.database) as session:
            result = await session.run(Query(text, timeout=self.timeout), params)
            return await result.data()

    async def lookup(self, request: LookupRequest) -> Tuple[List[ContentItem], bool]:
        try:
            rows = await self._run(CONTENT_BY_CONCEPT_QUERY, self.parameters(request))
        except (Neo4jError, DriverError, OSError) as e:
            log.error("content lookup failed", concept_id=request.concept_id, error=str(e))
            raise ContentLookupError(str(e)) from e

        items = [to_content_item(row, self.env) for row in rows if row.get("uuid")]
        log.debug("content lookup", concept_id=request.concept_id, count=len(items))
        return items, len(items) > 0

    async def check_connectivity(self) -> None:
        try:
            await self._run(CONNECTIVITY_QUERY, {})
        except (Neo4jError, DriverError, OSError) as e:
            raise ContentLookupError(str(e)) from e
