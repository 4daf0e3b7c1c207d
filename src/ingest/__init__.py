"""Review ingestion module."""

from src.ingest.bootstrap import ensure_collections, index_reviews
from src.ingest.loader import ReviewDocument, iter_reviews, point_id

__all__ = [
    "ReviewDocument",
    "ensure_collections",
    "index_reviews",
    "iter_reviews",
    "point_id",
]
