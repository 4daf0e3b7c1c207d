"""Review search module."""

from src.search.highlight import (
    full_review_url,
    highlight_relevant_text,
    similarity_percent,
)
from src.search.models import ReviewHit, ReviewPayload, SearchRequest, SearchResponse
from src.search.service import ReviewSearchService

__all__ = [
    "ReviewHit",
    "ReviewPayload",
    "ReviewSearchService",
    "SearchRequest",
    "SearchResponse",
    "full_review_url",
    "highlight_relevant_text",
    "similarity_percent",
]
