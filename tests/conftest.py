"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import app
from src.api.deps import get_embedding_service, get_preference_store, get_vector_store
from src.config import PreferencesSettings
from src.embeddings.models import EmbeddingResult
from src.embeddings.service import EmbeddingService
from src.exceptions import ErrorCode, VectorStoreError
from src.preferences.store import PreferenceStore
from src.vectorstore.models import SearchResult, VectorRecord
from src.vectorstore.service import VectorStore


class FakeEmbeddingService(EmbeddingService):
    """Deterministic embedder that records what it was asked to embed."""

    def __init__(self, dimensions: int = 3, error: Exception | None = None) -> None:
        self._dimensions = dimensions
        self.error = error
        self.texts: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-model"

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def embed(self, text: str) -> EmbeddingResult:
        return (await self.embed_batch([text]))[0]

    async def embed_batch(self, texts: list[str]) -> list[EmbeddingResult]:
        if self.error is not None:
            raise self.error
        self.texts.extend(texts)
        return [
            EmbeddingResult(
                text=text,
                embedding=[0.1] * self._dimensions,
                model=self.model_name,
                dimensions=self._dimensions,
            )
            for text in texts
        ]


class FakeVectorStore(VectorStore):
    """In-memory store returning canned search results."""

    def __init__(self, results: list[SearchResult] | None = None) -> None:
        self.results = results or []
        self.error: Exception | None = None
        self.collections: set[str] = set()
        self.upserted: dict[str, list[VectorRecord]] = {}
        self.searches: list[dict] = []

    async def create_collection(self, name: str, dimensions: int) -> None:
        if name in self.collections:
            raise VectorStoreError(
                f"Collection already exists: {name}",
                code=ErrorCode.COLLECTION_EXISTS,
            )
        self.collections.add(name)

    async def collection_exists(self, name: str) -> bool:
        if self.error is not None:
            raise self.error
        return name in self.collections

    async def upsert(self, collection: str, records: list[VectorRecord]) -> int:
        self.upserted.setdefault(collection, []).extend(records)
        return len(records)

    async def search(
        self,
        collection: str,
        vector: list[float],
        limit: int = 10,
    ) -> list[SearchResult]:
        self.searches.append({"collection": collection, "vector": vector, "limit": limit})
        if self.error is not None:
            raise self.error
        return self.results[:limit]


def make_hit(
    hit_id: str = "1",
    score: float = 0.9,
    /,
    **payload: object,
) -> SearchResult:
    """Build a store hit with a complete review payload by default."""
    review = {
        "title": "Party Album",
        "artists": "The Band",
        "body": "Great party anthem. Slow and sad.",
        "score": 8.5,
        "review_url": "/reviews/albums/party-album/",
    }
    review.update(payload)
    return SearchResult(id=hit_id, score=score, payload=review)


@pytest.fixture
def fake_embedding() -> FakeEmbeddingService:
    return FakeEmbeddingService()


@pytest.fixture
def fake_store() -> FakeVectorStore:
    store = FakeVectorStore([make_hit("1", 0.91), make_hit("2", 0.52, title="Other")])
    store.collections.add("music_reviews")
    return store


@pytest.fixture
def preference_store(tmp_path: Path) -> PreferenceStore:
    return PreferenceStore(PreferencesSettings(storage_path=tmp_path / "prefs.json"))


@pytest.fixture
async def client(
    fake_embedding: FakeEmbeddingService,
    fake_store: FakeVectorStore,
    preference_store: PreferenceStore,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for the FastAPI app with fake services.

    Yields:
        AsyncClient configured for testing.
    """
    app.dependency_overrides[get_embedding_service] = lambda: fake_embedding
    app.dependency_overrides[get_vector_store] = lambda: fake_store
    app.dependency_overrides[get_preference_store] = lambda: preference_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
