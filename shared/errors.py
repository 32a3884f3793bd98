"""
Errors raised while serving content-by-concept requests.

Every error carries the HTTP status it maps to and the message rendered as
`{"message": "..."}` by `content_api_error_handler`.
"""

from __future__ import annotations

from typing import Iterable

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = structlog.get_logger(__name__)

JSON_MEDIA_TYPE = "application/json; charset=UTF-8"


class ContentApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(ContentApiError):
    """Missing or malformed query parameters."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConceptContentNotFoundError(ContentApiError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, concept_id: str) -> None:
        super().__init__(f"No content found for concept with uuid {concept_id}.")
        self.concept_id = concept_id


class UpstreamUnavailableError(ContentApiError):
    """The graph database could not be reached or the query failed."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, concept_id: str, detail: str) -> None:
        super().__init__(f"Error getting content for concept with uuid {concept_id}, err={detail}")
        self.concept_id = concept_id
        self.detail = detail


class SerializationError(ContentApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, concept_id: str, detail: str) -> None:
        super().__init__(f"Error parsing content for concept with uuid {concept_id}, err={detail}")
        self.concept_id = concept_id
        self.detail = detail


class ClientClosedRequestError(ContentApiError):
    """The client went away before the lookup finished."""

    status_code = 499

    def __init__(self, concept_id: str) -> None:
        super().__init__(f"Client closed request for concept with uuid {concept_id}.")
        self.concept_id = concept_id


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, media_type=JSON_MEDIA_TYPE)


async def content_api_error_handler(request: Request, exc: ContentApiError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("request failed", path=request.url.path, status=exc.status_code, error=exc.message)
    else:
        log.info("request rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return error_response(exc.status_code, exc.message)


def empty_method_not_allowed_handler(paths: Iterable[str]):
    """
    Any method a route on one of `paths` doesn't serve gets a bare 405 with
    no body; other HTTP errors keep FastAPI's default rendering.
    """
    empty_405_paths = frozenset(paths)

    async def handler(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and request.url.path in empty_405_paths:
            return Response(status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
        return await http_exception_handler(request, exc)

    return handler


def register_error_handlers(app: FastAPI, empty_405_paths: Iterable[str] = ()) -> None:
    app.add_exception_handler(ContentApiError, content_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, empty_method_not_allowed_handler(empty_405_paths))
