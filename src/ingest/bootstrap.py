"""Collection setup and review indexing."""

from collections.abc import Iterable
from itertools import batched

from src.embeddings.service import EmbeddingService
from src.exceptions import ErrorCode, VectorStoreError
from src.ingest.loader import ReviewDocument
from src.logging_config import get_logger
from src.vectorstore.models import VectorRecord
from src.vectorstore.service import VectorStore

logger = get_logger(__name__)


async def ensure_collections(
    store: VectorStore,
    names: Iterable[str],
    dimensions: int,
) -> list[str]:
    """Create each collection that does not exist yet.

    Args:
        store: Target vector store.
        names: Collection names.
        dimensions: Vector size of the collections.

    Returns:
        Names of the collections that were created.
    """
    created: list[str] = []
    for name in names:
        try:
            await store.create_collection(name, dimensions=dimensions)
        except VectorStoreError as e:
            if e.code != ErrorCode.COLLECTION_EXISTS:
                raise
            logger.info(f"Collection already exists, skipping: {name}")
            continue
        created.append(name)
    return created


async def index_reviews(
    reviews: Iterable[ReviewDocument],
    embedding_service: EmbeddingService,
    store: VectorStore,
    collection: str,
    batch_size: int = 32,
) -> int:
    """Embed reviews and upsert them into a collection in batches.

    Returns:
        Number of reviews indexed.
    """
    total = 0
    for batch in batched(reviews, batch_size):
        embeddings = await embedding_service.embed_batch(
            [review.embedding_text for review in batch]
        )
        records = [
            VectorRecord(
                id=review.id,
                vector=embedding.embedding,
                payload=review.payload.model_dump(),
            )
            for review, embedding in zip(batch, embeddings, strict=True)
        ]
        total += await store.upsert(collection, records)
        logger.info(f"Indexed {total} reviews", extra={"collection": collection})
    return total
