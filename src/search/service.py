"""Semantic search over indexed music reviews."""

import time

from pydantic import ValidationError as PayloadValidationError

from src.embeddings.service import EmbeddingService
from src.exceptions import ErrorCode, ReviewSearchError, SearchError, ValidationError
from src.logging_config import get_logger
from src.observability.metrics import track_search_request
from src.search.models import ReviewHit, ReviewPayload
from src.vectorstore.models import SearchResult
from src.vectorstore.service import VectorStore

logger = get_logger(__name__)

QUERY_REQUIRED = "Query is required"
SEARCH_FAILED = "Failed to perform search"


class ReviewSearchService:
    """Embeds a query and retrieves the nearest reviews from the store.

    A search either returns every hit or fails as a whole; there are no
    retries and no partial results.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        vector_store: VectorStore,
        collection: str,
        limit: int = 10,
    ) -> None:
        """Initialize the search service.

        Args:
            embedding_service: Service for embedding queries.
            vector_store: Vector database holding reviews.
            collection: Name of the reviews collection.
            limit: Number of nearest reviews to return.
        """
        self._embedding_service = embedding_service
        self._vector_store = vector_store
        self._collection = collection
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    async def search(self, query: str | None) -> list[ReviewHit]:
        """Find the reviews closest in meaning to a query.

        Args:
            query: Free-text query.

        Returns:
            At most ``limit`` hits, most similar first.

        Raises:
            ValidationError: If the query is missing or blank.
            SearchError: If embedding, the store call or payload mapping fails.
        """
        if query is None or not query.strip():
            raise ValidationError(QUERY_REQUIRED)

        start = time.perf_counter()
        try:
            embedding = await self._embedding_service.embed(query.strip())
            hits = await self._vector_store.search(
                collection=self._collection,
                vector=embedding.embedding,
                limit=self._limit,
            )
            results = [self._to_review_hit(hit) for hit in hits[: self._limit]]

        except Exception as e:
            track_search_request(time.perf_counter() - start, 0, 0.0, success=False)
            cause_code = e.code.value if isinstance(e, ReviewSearchError) else None
            logger.error(
                f"Search failed: {e}",
                exc_info=True,
                extra={
                    "collection": self._collection,
                    "query_length": len(query),
                    "cause_code": cause_code,
                },
            )
            code = (
                ErrorCode.INVALID_REVIEW_PAYLOAD
                if isinstance(e, PayloadValidationError)
                else ErrorCode.SEARCH_ERROR
            )
            raise SearchError(
                SEARCH_FAILED,
                code=code,
                details={"query": query[:100], "error": str(e), "cause_code": cause_code},
            ) from e

        top_score = results[0].score if results else 0.0
        track_search_request(time.perf_counter() - start, len(results), top_score)
        logger.debug(
            f"Found {len(results)} reviews",
            extra={"query_length": len(query), "top_score": top_score},
        )
        return results

    @staticmethod
    def _to_review_hit(hit: SearchResult) -> ReviewHit:
        return ReviewHit(
            id=hit.id,
            score=hit.score,
            payload=ReviewPayload.model_validate(hit.payload),
        )
