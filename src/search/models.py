"""Review search data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReviewPayload(BaseModel):
    """Metadata of an indexed music review.

    Reviews are owned by the vector store; fields missing from a stored
    point fall back to empty defaults so every hit carries a payload.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", description="Album or track title")
    artists: str = Field(default="", description="Artist names, comma separated")
    body: str = Field(default="", description="Review text")
    score: float | None = Field(default=None, description="Review score (0-10)")
    review_url: str = Field(default="", description="Full review URL, possibly relative")

    @field_validator("artists", mode="before")
    @classmethod
    def _join_artists(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ", ".join(str(artist) for artist in value if artist)
        return value

    @field_validator("title", "body", "review_url", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ReviewHit(BaseModel):
    """A review matched by semantic search."""

    id: str = Field(description="Vector store identifier of the review")
    score: float = Field(ge=0.0, le=1.0, description="Similarity to the query")
    payload: ReviewPayload = Field(default_factory=ReviewPayload)


class SearchRequest(BaseModel):
    """Request body for review search.

    The query is optional at the schema level so a missing query is
    reported as a 400 rather than a validation error.
    """

    query: str | None = Field(default=None, description="Free-text search query")

    @field_validator("query", mode="before")
    @classmethod
    def _coerce_query(cls, value: Any) -> Any:
        # Numbers are searched as text; other non-string values carry no query
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return str(value)
        if value is None or isinstance(value, str):
            return value
        return None

    @classmethod
    def from_body(cls, body: Any) -> "SearchRequest":
        """Read a decoded JSON body; anything but an object has no query."""
        if not isinstance(body, dict):
            return cls()
        return cls.model_validate(body)


class SearchResponse(BaseModel):
    """Response envelope for review search."""

    result: list[ReviewHit] = Field(description="Matched reviews, most similar first")
