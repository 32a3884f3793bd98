# conftest.py
from typing import AsyncGenerator, List, Optional, Tuple

import anyio
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import app
from content.domain.entities.lookup import LookupRequest
from content.ports.outbound.content_lookup_port import ContentLookupError, ContentLookupPort
from shared.entities.content import ContentItem
from shared.wiring import get_cache_control_header, get_content_lookup_port

TEST_CACHE_CONTROL = "max-age=360, public"


# ---- Fakes ------------------------------------------------------------------

class FakeContentLookup(ContentLookupPort):
    """In-memory content store keyed by concept uuid; records every request it gets."""

    def __init__(self) -> None:
        self.content: dict[str, List[ContentItem]] = {}
        self.fail_with: Optional[str] = None
        self.connectivity_error: Optional[str] = None
        self.requests: list[LookupRequest] = []
        # Set to an event to make lookups hang until cancelled
        self.hang_started: Optional[anyio.Event] = None
        self.cancelled = False

    def add(self, concept_id: str, *items: ContentItem) -> None:
        self.content.setdefault(concept_id, []).extend(items)

    async def lookup(self, request: LookupRequest) -> Tuple[List[ContentItem], bool]:
        self.requests.append(request)
        if self.hang_started is not None:
            self.hang_started.set()
            try:
                await anyio.sleep_forever()
            except anyio.get_cancelled_exc_class():
                self.cancelled = True
                raise
        if self.fail_with:
            raise ContentLookupError(self.fail_with)
        if request.concept_id not in self.content:
            return [], False
        return list(self.content[request.concept_id]), True

    async def check_connectivity(self) -> None:
        if self.connectivity_error:
            raise ContentLookupError(self.connectivity_error)

    @property
    def last_request(self) -> Optional[LookupRequest]:
        return self.requests[-1] if self.requests else None


# ---- Dependency overrides ----------------------------------------------------

@pytest.fixture()
def fake_lookup() -> FakeContentLookup:
    return FakeContentLookup()


@pytest.fixture(autouse=True)
def override_dependencies(fake_lookup: FakeContentLookup):
    app.dependency_overrides[get_content_lookup_port] = lambda: fake_lookup
    app.dependency_overrides[get_cache_control_header] = lambda: TEST_CACHE_CONTROL
    yield
    app.dependency_overrides.pop(get_content_lookup_port, None)
    app.dependency_overrides.pop(get_cache_control_header, None)


# ---- HTTP client -------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
