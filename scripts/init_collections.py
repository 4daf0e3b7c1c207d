#!/usr/bin/env python
"""Create the Qdrant collections and optionally index music reviews.

Usage:
    python -m scripts.init_collections
    python -m scripts.init_collections --reviews data/reviews.jsonl

Collections that already exist are left untouched.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from src.config import get_settings
from src.embeddings.service import SentenceTransformerEmbeddingService
from src.exceptions import ReviewSearchError
from src.ingest import ensure_collections, index_reviews, iter_reviews
from src.logging_config import get_logger, setup_logging
from src.vectorstore.service import QdrantVectorStore

logger = get_logger(__name__)


async def run(reviews_path: Path | None, batch_size: int | None) -> int:
    """Create collections and index reviews.

    Returns:
        Number of reviews indexed.
    """
    settings = get_settings()
    setup_logging(level=settings.log_level)

    store = QdrantVectorStore(settings.qdrant)
    try:
        created = await ensure_collections(
            store,
            [settings.qdrant.collection_name, settings.qdrant.preferences_collection],
            dimensions=settings.embedding.dimensions,
        )
        logger.info(f"Created collections: {created or 'none'}")

        if reviews_path is None:
            return 0

        embedding_service = SentenceTransformerEmbeddingService(settings.embedding)
        indexed = await index_reviews(
            iter_reviews(reviews_path),
            embedding_service,
            store,
            collection=settings.qdrant.collection_name,
            batch_size=batch_size or settings.embedding.batch_size,
        )
        logger.info(f"Indexed {indexed} reviews from {reviews_path}")
        return indexed
    finally:
        await store.close()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Create Qdrant collections and index music reviews",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--reviews",
        type=Path,
        default=None,
        help="JSON Lines file of reviews to index",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Reviews embedded per batch (default from EMBEDDING_BATCH_SIZE)",
    )

    args = parser.parse_args()

    try:
        asyncio.run(run(args.reviews, args.batch_size))
    except ReviewSearchError as e:
        logger.error(f"Initialization failed: {e.message}", extra={"details": e.details})
        sys.exit(1)


if __name__ == "__main__":
    main()
