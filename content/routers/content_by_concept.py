from typing import Dict, List

from fastapi import APIRouter, Depends, Request, Response, status

from content.services.content_by_concept_service import ContentByConceptService
from content.services.request_translator import parse_lookup_request
from shared.cancellation import run_until_disconnect
from shared.errors import JSON_MEDIA_TYPE
from shared.wiring import get_cache_control_header, get_content_by_concept_service

router = APIRouter(prefix="/content", tags=["content"])


def _message(text: str) -> dict:
    return {"application/json": {"example": {"message": text}}}


def _query_params(request: Request) -> Dict[str, List[str]]:
    params = request.query_params
    return {key: params.getlist(key) for key in params.keys()}


# ==============================
# Content annotated by a concept
# ==============================
@router.get(
    "",
    summary="List content annotated by a concept",
    description=(
        "Returns summaries of the content annotated by the concept named in "
        "`isAnnotatedBy`, newest first.\n\n"
        "### Query parameters\n"
        "- `isAnnotatedBy` (required, exactly once): absolute concept URI, "
        "e.g. `http://api.ft.com/things/<uuid>`\n"
        "- `limit`: maximum number of items (default 10)\n"
        "- `fromDate`, `toDate`: publish date window as `YYYY-MM-DD`. "
        "A date that can't be parsed is ignored.\n\n"
        "Successful responses carry a `Cache-Control` header."
    ),
    responses={
        200: {
            "description": "Content annotated by the concept.",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "http://www.ft.com/things/3fc9fe3e-af8c-4f7f-961a-e5065392bb31",
                            "apiUrl": "http://api.ft.com/content/3fc9fe3e-af8c-4f7f-961a-e5065392bb31",
                        }
                    ]
                }
            },
        },
        400: {"description": "Missing, repeated or malformed query parameter.",
              "content": _message("Only one concept uri should be provided")},
        404: {"description": "No content for the concept.",
              "content": _message("No content found for concept with uuid 5d1510f8-2779-4b74-adab-0a5eb138fca6.")},
        503: {"description": "The graph database is unavailable.",
              "content": _message("Error getting content for concept with uuid 5d1510f8-2779-4b74-adab-0a5eb138fca6, err=...")},
    },
    openapi_extra={
        "parameters": [
            {"name": "isAnnotatedBy", "in": "query", "required": True, "schema": {"type": "string"}},
            {"name": "limit", "in": "query", "required": False, "schema": {"type": "integer", "default": 10}},
            {"name": "fromDate", "in": "query", "required": False, "schema": {"type": "string", "format": "date"}},
            {"name": "toDate", "in": "query", "required": False, "schema": {"type": "string", "format": "date"}},
        ]
    },
)
async def get_content_by_concept(
    request: Request,
    svc: ContentByConceptService = Depends(get_content_by_concept_service),
    cache_control: str = Depends(get_cache_control_header),
):
    lookup = parse_lookup_request(_query_params(request))
    items = await run_until_disconnect(request, lookup.concept_id, lambda: svc.content_for_concept(lookup))
    body = svc.serialize(lookup.concept_id, items)
    return Response(
        content=body,
        status_code=status.HTTP_200_OK,
        media_type=JSON_MEDIA_TYPE,
        headers={"Cache-Control": cache_control},
    )

