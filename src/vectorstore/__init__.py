"""Vector store module."""

from src.vectorstore.models import SearchResult, VectorRecord
from src.vectorstore.scoring import normalize_score, similarity_from_distance
from src.vectorstore.service import QdrantVectorStore, VectorStore

__all__ = [
    "QdrantVectorStore",
    "SearchResult",
    "VectorRecord",
    "VectorStore",
    "normalize_score",
    "similarity_from_distance",
]
