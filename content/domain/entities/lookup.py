from pydantic import BaseModel, ConfigDict

THING_URI_PREFIX = "http://api.ft.com/things/"
DEFAULT_LIMIT = 10


class LookupRequest(BaseModel):
    """
    Normalized content-by-concept query.

    Epoch bounds are Unix seconds at UTC midnight; 0 leaves that side of the
    publish-date window open.
    """

    model_config = ConfigDict(frozen=True)

    concept_id: str
    limit: int = DEFAULT_LIMIT
    from_date_epoch: int = 0
    to_date_epoch: int = 0
