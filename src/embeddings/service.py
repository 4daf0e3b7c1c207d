"""Embedding service interface and sentence-transformers implementation."""

import asyncio
import threading
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from src.config import EmbeddingSettings, get_settings
from src.embeddings.models import EmbeddingResult
from src.exceptions import EmbeddingError, ErrorCode
from src.logging_config import get_logger
from src.observability.metrics import track_embedding_request

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

logger = get_logger(__name__)

# Loaded models, shared by every service instance in the process.
_models: dict[str, "SentenceTransformer"] = {}
_models_lock = threading.Lock()


def _get_device() -> str:
    """Determine the best available torch device."""
    import torch

    if torch.cuda.is_available():
        return "cuda"

    try:
        if torch.backends.mps.is_available():
            return "mps"
    except AttributeError:
        pass

    return "cpu"


def load_model(model_name: str, device: str | None = None) -> "SentenceTransformer":
    """Load a sentence-transformers model once per process.

    The first call downloads (or reads from the hub cache) and loads the
    model; later calls return the same instance. Models are read-only after
    loading and are never unloaded.

    Args:
        model_name: Hugging Face hub model name.
        device: Torch device; auto-detected when not given.

    Returns:
        The loaded model.
    """
    with _models_lock:
        model = _models.get(model_name)
        if model is None:
            from sentence_transformers import SentenceTransformer

            resolved_device = device or _get_device()
            logger.info(
                f"Loading embedding model: {model_name}",
                extra={"device": resolved_device},
            )
            model = SentenceTransformer(model_name, device=resolved_device)
            _models[model_name] = model
        return model


class EmbeddingService(ABC):
    """Abstract base class for embedding services.

    Defines the interface for generating text embeddings.
    """

    @abstractmethod
    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text.

        Args:
            text: Text to embed.

        Returns:
            EmbeddingResult with vector.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[EmbeddingResult]:
        """Generate embeddings for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of EmbeddingResult objects, in input order.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model name used for embeddings."""
        ...

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Get the embedding dimensions."""
        ...


class SentenceTransformerEmbeddingService(EmbeddingService):
    """Embedding service backed by a local sentence-transformers model.

    Produces mean-pooled, L2-normalized vectors. Encoding is CPU/GPU bound
    and runs in a worker thread so the event loop stays responsive.
    """

    def __init__(
        self,
        settings: EmbeddingSettings | None = None,
        model: "SentenceTransformer | None" = None,
    ) -> None:
        """Initialize the embedding service.

        Args:
            settings: Embedding configuration. Uses defaults if not provided.
            model: Preloaded model (for testing). Loaded lazily if not provided.
        """
        self._settings = settings or get_settings().embedding
        self._model = model

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.model

    @property
    def dimensions(self) -> int:
        """Get embedding dimensions."""
        return self._settings.dimensions

    async def _get_model(self) -> "SentenceTransformer":
        """Get the shared model, loading it on first use."""
        if self._model is None:
            self._model = await asyncio.to_thread(
                load_model, self._settings.model, self._settings.device
            )
        return self._model

    async def embed(self, text: str) -> EmbeddingResult:
        """Generate embedding for a single text."""
        results = await self.embed_batch([text])
        return results[0]

    async def embed_batch(self, texts: list[str]) -> list[EmbeddingResult]:
        """Generate embeddings for multiple texts."""
        if not texts:
            return []

        start = time.perf_counter()
        try:
            model = await self._get_model()
            vectors = await asyncio.to_thread(
                model.encode,
                texts,
                batch_size=self._settings.batch_size,
                normalize_embeddings=True,
                convert_to_numpy=True,
                show_progress_bar=False,
            )
            matrix = np.asarray(vectors, dtype=np.float32).reshape(len(texts), -1)
        except Exception as e:
            track_embedding_request(
                self.model_name, time.perf_counter() - start, len(texts), success=False
            )
            logger.error(
                f"Embedding failed: {e}",
                extra={"model": self.model_name, "batch_size": len(texts)},
            )
            raise EmbeddingError(
                f"Failed to embed text: {e}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"model": self.model_name, "error": str(e)},
            ) from e

        track_embedding_request(
            self.model_name, time.perf_counter() - start, len(texts)
        )

        if matrix.shape[1] != self.dimensions:
            raise EmbeddingError(
                f"Model produced {matrix.shape[1]}-dimensional vectors, "
                f"expected {self.dimensions}",
                code=ErrorCode.EMBEDDING_DIMENSION_MISMATCH,
                details={"model": self.model_name, "actual": matrix.shape[1]},
            )

        return [
            EmbeddingResult(
                text=text,
                embedding=row.tolist(),
                model=self.model_name,
                dimensions=len(row),
            )
            for text, row in zip(texts, matrix, strict=True)
        ]
