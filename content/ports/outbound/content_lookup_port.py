from typing import Protocol, List, Tuple

from content.domain.entities.lookup import LookupRequest
from shared.entities.content import ContentItem


class ContentLookupError(Exception):
    """The store was unreachable or rejected the query."""


class ContentLookupPort(Protocol):
    """
    Outbound port onto the content store.

    lookup() returns (items, found). found is False when nothing matched,
    whether or not the concept itself exists. The limit is forwarded to the
    store unchanged: implementations document what the store does with zero
    or negative values. Store failures raise ContentLookupError.
    """

    async def lookup(self, request: LookupRequest) -> Tuple[List[ContentItem], bool]: ...

    async def check_connectivity(self) -> None: ...
