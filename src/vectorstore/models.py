"""Vector store data models."""

from typing import Any

from pydantic import BaseModel, Field


class VectorRecord(BaseModel):
    """A point to store in the vector database.

    Attributes:
        id: Point identifier (UUID string or unsigned integer as string).
        vector: The embedding vector.
        payload: Metadata stored alongside the vector.
    """

    id: str = Field(min_length=1, description="Point identifier")
    vector: list[float] = Field(description="Embedding vector")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Metadata payload",
    )


class SearchResult(BaseModel):
    """A nearest-neighbour hit returned by the vector store.

    Attributes:
        id: Point identifier, opaque to callers.
        score: Similarity in [0, 1] (higher is more similar).
        payload: Stored metadata, possibly incomplete.
    """

    id: str = Field(description="Point identifier")
    score: float = Field(ge=0.0, le=1.0, description="Similarity score")
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Point metadata",
    )
