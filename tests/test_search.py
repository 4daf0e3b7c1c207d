"""Tests for the review search service."""

import logging

import pytest
from conftest import FakeEmbeddingService, FakeVectorStore, make_hit

from src.exceptions import EmbeddingError, ErrorCode, SearchError, ValidationError, VectorStoreError
from src.search.models import ReviewPayload
from src.search.service import ReviewSearchService


def _service(
    store: FakeVectorStore,
    embedding: FakeEmbeddingService | None = None,
    limit: int = 10,
) -> ReviewSearchService:
    return ReviewSearchService(
        embedding_service=embedding or FakeEmbeddingService(),
        vector_store=store,
        collection="music_reviews",
        limit=limit,
    )


class TestReviewPayload:
    """Tests for payload normalization."""

    def test_missing_fields_get_defaults(self) -> None:
        payload = ReviewPayload.model_validate({"title": "Only a title"})
        assert payload.title == "Only a title"
        assert payload.artists == ""
        assert payload.body == ""
        assert payload.score is None
        assert payload.review_url == ""

    def test_artist_list_is_joined(self) -> None:
        payload = ReviewPayload.model_validate({"artists": ["Daft Punk", "Pharrell"]})
        assert payload.artists == "Daft Punk, Pharrell"

    def test_null_fields_become_empty(self) -> None:
        payload = ReviewPayload.model_validate({"title": None, "artists": None, "body": None})
        assert (payload.title, payload.artists, payload.body) == ("", "", "")

    def test_unknown_fields_ignored(self) -> None:
        payload = ReviewPayload.model_validate({"genre": "rock", "score": "7.9"})
        assert payload.score == 7.9
        assert not hasattr(payload, "genre")


class TestReviewSearchService:
    """Tests for ReviewSearchService."""

    async def test_search_returns_hits(self) -> None:
        store = FakeVectorStore([make_hit("a", 0.9), make_hit("b", 0.4, title="Second")])
        embedding = FakeEmbeddingService()

        results = await _service(store, embedding).search("  party  ")

        assert [r.id for r in results] == ["a", "b"]
        assert results[0].score == 0.9
        assert results[1].payload.title == "Second"
        assert embedding.texts == ["party"]
        assert store.searches[0]["collection"] == "music_reviews"
        assert store.searches[0]["limit"] == 10

    async def test_results_capped_at_limit(self) -> None:
        store = FakeVectorStore([make_hit(str(i), 0.5) for i in range(15)])

        results = await _service(store).search("summer vibes")

        assert len(results) == 10

    async def test_missing_payload_filled(self) -> None:
        store = FakeVectorStore()
        store.results = [make_hit("a", 0.7)]
        store.results[0].payload.clear()

        results = await _service(store).search("breakup")

        assert results[0].payload == ReviewPayload()

    @pytest.mark.parametrize("query", [None, "", "   ", "\n\t"])
    async def test_blank_query_rejected(self, query: str | None) -> None:
        store = FakeVectorStore()

        with pytest.raises(ValidationError) as exc_info:
            await _service(store).search(query)

        assert exc_info.value.message == "Query is required"
        assert store.searches == []

    async def test_embedding_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        embedding = FakeEmbeddingService(error=EmbeddingError("model not found"))

        with caplog.at_level(logging.ERROR), pytest.raises(SearchError) as exc_info:
            await _service(FakeVectorStore(), embedding).search("party")

        assert exc_info.value.message == "Failed to perform search"
        assert exc_info.value.code == ErrorCode.SEARCH_ERROR
        assert "model not found" in caplog.text

    async def test_store_failure(self) -> None:
        store = FakeVectorStore()
        store.error = VectorStoreError("connection refused")

        with pytest.raises(SearchError) as exc_info:
            await _service(store).search("party")

        assert "connection refused" in exc_info.value.details["error"]

    async def test_missing_collection_is_a_search_failure(self) -> None:
        store = FakeVectorStore()
        store.error = VectorStoreError(
            "Collection not found",
            code=ErrorCode.COLLECTION_NOT_FOUND,
        )

        with pytest.raises(SearchError) as exc_info:
            await _service(store).search("party")

        assert exc_info.value.code == ErrorCode.SEARCH_ERROR
        assert exc_info.value.details["cause_code"] == "RS-4001"

    async def test_unusable_payload_fails_request(self) -> None:
        store = FakeVectorStore([make_hit("a", 0.9), make_hit("b", 0.8, score="ten")])

        with pytest.raises(SearchError) as exc_info:
            await _service(store).search("party")

        assert exc_info.value.code == ErrorCode.INVALID_REVIEW_PAYLOAD
