import json
from typing import List

from pydantic_core import PydanticSerializationError

from content.domain.entities.lookup import LookupRequest
from content.ports.outbound.content_lookup_port import ContentLookupError, ContentLookupPort
from shared.entities.content import ContentItem
from shared.errors import ConceptContentNotFoundError, SerializationError, UpstreamUnavailableError


class ContentByConceptService:
    """
    Runs a validated lookup against the content store and maps the outcome:
      - store failure -> UpstreamUnavailableError (503)
      - nothing found -> ConceptContentNotFoundError (404)
      - found (possibly empty) -> the items
    Nothing is retried here.
    """

    def __init__(self, lookup_port: ContentLookupPort):
        self.lookup_port = lookup_port

    async def content_for_concept(self, request: LookupRequest) -> List[ContentItem]:
        try:
            items, found = await self.lookup_port.lookup(request)
        except ContentLookupError as e:
            raise UpstreamUnavailableError(request.concept_id, str(e)) from e
        if not found:
            raise ConceptContentNotFoundError(request.concept_id)
        return list(items)

    @staticmethod
    def serialize(concept_id: str, items: List[ContentItem]) -> bytes:
        try:
            payload = [item.model_dump(mode="json", by_alias=True) for item in items]
            return json.dumps(payload, ensure_ascii=False, allow_nan=False).encode("utf-8")
        except (PydanticSerializationError, ValueError, TypeError) as e:
            raise SerializationError(concept_id, str(e)) from e

    async def check_connectivity(self) -> None:
        await self.lookup_port.check_connectivity()
