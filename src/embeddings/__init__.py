"""Embedding service module."""

from src.embeddings.models import EmbeddingResult
from src.embeddings.service import (
    EmbeddingService,
    SentenceTransformerEmbeddingService,
    load_model,
)

__all__ = [
    "EmbeddingResult",
    "EmbeddingService",
    "SentenceTransformerEmbeddingService",
    "load_model",
]
