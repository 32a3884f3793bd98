from typing import Any, Mapping

from shared.entities.content import ContentItem

THING_ID_BASE = "http://www.ft.com/things/"
PROD_API_BASE = "http://api.ft.com"
TEST_API_BASE = "http://test.api.ft.com"


def api_base_url(env: str) -> str:
    return TEST_API_BASE if env == "test" else PROD_API_BASE


def to_content_item(record: Mapping[str, Any], env: str) -> ContentItem:
    uuid = record["uuid"]
    return ContentItem(
        id=f"{THING_ID_BASE}{uuid}",
        api_url=f"{api_base_url(env)}/content/{uuid}",
    )
