"""
Turns the raw `/content` query string into a `LookupRequest`.

Checks run in a fixed order and the first failure wins. Dates are the one
permissive field: an unparseable `fromDate`/`toDate` only logs a warning and
leaves that bound open.
"""

from __future__ import annotations

import re
from calendar import timegm
from datetime import datetime
from typing import Mapping, Sequence

import structlog

from content.domain.entities.lookup import DEFAULT_LIMIT, THING_URI_PREFIX, LookupRequest
from shared.errors import ClientInputError

log = structlog.get_logger(__name__)

CONCEPT_PARAM = "isAnnotatedBy"
LIMIT_PARAM = "limit"
FROM_DATE_PARAM = "fromDate"
TO_DATE_PARAM = "toDate"

MISSING_CONCEPT_MESSAGE = (
    "Missing or empty query parameter isAnnotatedBy. Expecting valid absolute concept URI."
)
MULTIPLE_CONCEPTS_MESSAGE = "Only one concept uri should be provided"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


def _first(params: Mapping[str, Sequence[str]], name: str) -> str:
    values = params.get(name) or []
    return values[0] if values else ""


def concept_id_from_uri(concept_uri: str) -> str:
    """Bare concept UUID; URIs outside the things namespace are returned unchanged."""
    if concept_uri.startswith(THING_URI_PREFIX):
        return concept_uri[len(THING_URI_PREFIX):]
    return concept_uri


def parse_limit(raw: str) -> int:
    if raw == "":
        log.debug("No limit provided. Using default", default=DEFAULT_LIMIT)
        return DEFAULT_LIMIT
    if not _INTEGER.fullmatch(raw):
        raise ClientInputError(f"Error limit is not a number: {raw}.")
    limit = int(raw)
    if not _INT64_MIN <= limit <= _INT64_MAX:
        raise ClientInputError(f"Error limit is not a number: {raw}.")
    return limit


def date_to_epoch(date_string: str) -> int:
    """UTC-midnight epoch seconds for YYYY-MM-DD, or 0 when it can't be parsed."""
    if _ISO_DATE.fullmatch(date_string):
        try:
            parsed = datetime.strptime(date_string, "%Y-%m-%d")
        except ValueError:
            pass
        else:
            return timegm(parsed.utctimetuple())
    log.warning("Date can't be parsed", date=date_string)
    return 0


def _optional_date(params: Mapping[str, Sequence[str]], name: str) -> int:
    raw = _first(params, name)
    if raw == "":
        log.debug(f"No {name} supplied.")
        return 0
    return date_to_epoch(raw)


def parse_lookup_request(params: Mapping[str, Sequence[str]]) -> LookupRequest:
    """
    Validate multi-valued query parameters and build the lookup request.

    Raises:
        ClientInputError: the concept is missing, empty or repeated, or the
            limit is not an integer.
    """
    concept_uris = params.get(CONCEPT_PARAM)
    if not concept_uris:
        raise ClientInputError(MISSING_CONCEPT_MESSAGE)
    if len(concept_uris) > 1:
        raise ClientInputError(MULTIPLE_CONCEPTS_MESSAGE)
    if concept_uris[0] == "":
        raise ClientInputError(MISSING_CONCEPT_MESSAGE)

    return LookupRequest(
        concept_id=concept_id_from_uri(concept_uris[0]),
        limit=parse_limit(_first(params, LIMIT_PARAM)),
        from_date_epoch=_optional_date(params, FROM_DATE_PARAM),
        to_date_epoch=_optional_date(params, TO_DATE_PARAM),
    )
