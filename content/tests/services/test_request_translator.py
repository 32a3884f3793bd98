import pytest

from content.domain.entities.lookup import DEFAULT_LIMIT, LookupRequest
from content.services.request_translator import (
    MISSING_CONCEPT_MESSAGE,
    MULTIPLE_CONCEPTS_MESSAGE,
    concept_id_from_uri,
    date_to_epoch,
    parse_limit,
    parse_lookup_request,
)
from shared.errors import ClientInputError

CONCEPT_URI = "http://api.ft.com/things/5d1510f8-2779-4b74-adab-0a5eb138fca6"
CONCEPT_ID = "5d1510f8-2779-4b74-adab-0a5eb138fca6"


# ---------------------------
# Concept
# ---------------------------

def test_should_strip_things_prefix():
    assert concept_id_from_uri(CONCEPT_URI) == CONCEPT_ID


@pytest.mark.parametrize(
    "uri",
    [CONCEPT_ID, "https://api.ft.com/things/abc", "http://www.ft.com/things/abc", " http://api.ft.com/things/abc"],
)
def test_should_leave_unprefixed_concept_unchanged(uri):
    assert concept_id_from_uri(uri) == uri


def test_should_check_missing_concept_before_limit():
    # GIVEN both a missing concept and a broken limit
    with pytest.raises(ClientInputError) as exc:
        parse_lookup_request({"limit": ["abc"]})

    # THEN the first rule wins
    assert exc.value.message == MISSING_CONCEPT_MESSAGE
    assert exc.value.status_code == 400


def test_should_check_multiple_concepts_before_empty_value():
    with pytest.raises(ClientInputError) as exc:
        parse_lookup_request({"isAnnotatedBy": ["", CONCEPT_URI]})
    assert exc.value.message == MULTIPLE_CONCEPTS_MESSAGE


@pytest.mark.parametrize("params", [{}, {"isAnnotatedBy": []}, {"isAnnotatedBy": [""]}])
def test_should_reject_absent_or_empty_concept(params):
    with pytest.raises(ClientInputError) as exc:
        parse_lookup_request(params)
    assert exc.value.message == MISSING_CONCEPT_MESSAGE


def test_should_not_trim_whitespace_only_concept():
    request = parse_lookup_request({"isAnnotatedBy": ["  "]})
    assert request.concept_id == "  "


# ---------------------------
# Limit
# ---------------------------

@pytest.mark.parametrize("raw, expected", [("", DEFAULT_LIMIT), ("7", 7), ("+7", 7), ("0", 0), ("-3", -3), ("007", 7)])
def test_should_parse_limit(raw, expected):
    assert parse_limit(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "1.0", "0x10", "١٢", "1_000", "9223372036854775808", "-"])
def test_should_reject_non_integer_limit_echoing_raw_value(raw):
    with pytest.raises(ClientInputError) as exc:
        parse_limit(raw)
    assert exc.value.message == f"Error limit is not a number: {raw}."


def test_should_use_first_limit_when_repeated():
    request = parse_lookup_request({"isAnnotatedBy": [CONCEPT_URI], "limit": ["2", "abc"]})
    assert request.limit == 2


# ---------------------------
# Dates
# ---------------------------

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1970-01-01", 0),
        ("2016-01-01", 1451606400),
        ("2016-02-29", 1456704000),
        ("1969-12-31", -86400),
    ],
)
def test_should_convert_date_to_utc_midnight_epoch(raw, expected):
    assert date_to_epoch(raw) == expected


@pytest.mark.parametrize("raw", ["2015-02-29", "2016/01/01", "20160101", "2016-01-01T00:00:00Z", "not-a-date", "2016-01-1"])
def test_should_degrade_unparseable_date_to_zero(raw):
    assert date_to_epoch(raw) == 0


def test_should_build_full_lookup_request():
    request = parse_lookup_request(
        {
            "isAnnotatedBy": [CONCEPT_URI],
            "limit": ["25"],
            "fromDate": ["2016-01-01"],
            "toDate": ["garbage"],
        }
    )

    assert request == LookupRequest(
        concept_id=CONCEPT_ID, limit=25, from_date_epoch=1451606400, to_date_epoch=0
    )


def test_should_not_allow_lookup_request_mutation():
    request = parse_lookup_request({"isAnnotatedBy": [CONCEPT_URI]})
    with pytest.raises(Exception):
        request.limit = 1  # type: ignore[misc]
