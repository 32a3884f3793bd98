from fastapi import Depends
from neo4j import AsyncDriver

from app.core.config import settings
from app.core.database.graph import get_driver

# Content lookup port + adapter
from content.ports.outbound.content_lookup_port import ContentLookupPort
from content.adapters.outbound.lookup_neo4j import Neo4jContentLookupAdapter

# Content-by-concept service
from content.services.content_by_concept_service import ContentByConceptService


def get_content_lookup_port(driver: AsyncDriver = Depends(get_driver)) -> ContentLookupPort:
    return Neo4jContentLookupAdapter(driver, env=settings.env)


def get_content_by_concept_service(
    lookup: ContentLookupPort = Depends(get_content_lookup_port),
) -> ContentByConceptService:
    return ContentByConceptService(lookup_port=lookup)


def get_cache_control_header() -> str:
    return settings.cache_control_header
