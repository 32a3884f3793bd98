from pydantic import BaseModel, ConfigDict, Field


class ContentItem(BaseModel):
    """Summary of one piece of content; unknown fields are kept as-is."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    api_url: str = Field(alias="apiUrl")
