"""Dependency injection for FastAPI routes.

Services are created once per process and shared across requests.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.config import Settings, get_settings
from src.embeddings.service import EmbeddingService, SentenceTransformerEmbeddingService
from src.preferences.store import PreferenceStore
from src.search.service import ReviewSearchService
from src.vectorstore.service import QdrantVectorStore, VectorStore


@lru_cache
def get_embedding_service() -> EmbeddingService:
    """Get the shared embedding service."""
    return SentenceTransformerEmbeddingService()


@lru_cache
def get_vector_store() -> VectorStore:
    """Get the shared vector store."""
    return QdrantVectorStore()


@lru_cache
def get_preference_store() -> PreferenceStore:
    """Get the shared preference store."""
    return PreferenceStore()


def get_search_service(
    embedding_service: Annotated[EmbeddingService, Depends(get_embedding_service)],
    vector_store: Annotated[VectorStore, Depends(get_vector_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ReviewSearchService:
    """Build the review search service over the shared clients."""
    return ReviewSearchService(
        embedding_service=embedding_service,
        vector_store=vector_store,
        collection=settings.qdrant.collection_name,
        limit=settings.search.limit,
    )


async def close_services() -> None:
    """Close clients that were created during the process lifetime."""
    if get_vector_store.cache_info().currsize:
        await get_vector_store().close()


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
VectorStoreDep = Annotated[VectorStore, Depends(get_vector_store)]
SearchServiceDep = Annotated[ReviewSearchService, Depends(get_search_service)]
PreferenceStoreDep = Annotated[PreferenceStore, Depends(get_preference_store)]
