"""Loading music reviews from JSON Lines files."""

import json
from collections.abc import Iterator
from pathlib import Path
from uuid import NAMESPACE_URL, uuid5

from pydantic import BaseModel, Field
from pydantic import ValidationError as SchemaValidationError

from src.exceptions import ErrorCode, IngestError
from src.search.models import ReviewPayload


class ReviewDocument(BaseModel):
    """A review ready to be embedded and indexed."""

    id: str = Field(description="Qdrant point id (UUID)")
    payload: ReviewPayload

    @property
    def embedding_text(self) -> str:
        """Text embedded for the review: title, artists and body."""
        parts = (self.payload.title, self.payload.artists, self.payload.body)
        return "\n".join(part for part in parts if part)


def point_id(key: str) -> str:
    """Stable UUID for a review key, as Qdrant only accepts UUIDs or integers."""
    return str(uuid5(NAMESPACE_URL, key))


def iter_reviews(path: str | Path, encoding: str = "utf-8") -> Iterator[ReviewDocument]:
    """Yield reviews from a JSON Lines file.

    Each non-blank line is an object with ``title``, ``artists``, ``body``,
    ``score`` and ``review_url`` and optionally ``id``. Reviews without an
    id are keyed by their URL, then by their line number.

    Raises:
        IngestError: If the file is missing or a line is malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise IngestError(
            f"Review file not found: {path}",
            code=ErrorCode.REVIEW_FILE_NOT_FOUND,
            details={"path": str(path)},
        )

    with path.open(encoding=encoding) as fh:
        for line_no, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                raw = json.loads(line)
                payload = ReviewPayload.model_validate(raw)
            except (json.JSONDecodeError, SchemaValidationError) as e:
                raise IngestError(
                    f"Invalid review on line {line_no}: {e}",
                    code=ErrorCode.REVIEW_PARSE_ERROR,
                    details={"path": str(path), "line": line_no},
                ) from e

            key = str(raw.get("id") or payload.review_url or f"{path.name}:{line_no}")
            yield ReviewDocument(id=point_id(key), payload=payload)
