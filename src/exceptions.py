"""Application exception hierarchy.

All custom exceptions inherit from ReviewSearchError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "RS-1000"
    CONFIGURATION_ERROR = "RS-1001"
    VALIDATION_ERROR = "RS-1002"

    # Review ingestion errors (2xxx)
    REVIEW_FILE_NOT_FOUND = "RS-2000"
    REVIEW_PARSE_ERROR = "RS-2001"

    # Embedding errors (3xxx)
    EMBEDDING_SERVICE_ERROR = "RS-3000"
    EMBEDDING_DIMENSION_MISMATCH = "RS-3001"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "RS-4000"
    COLLECTION_NOT_FOUND = "RS-4001"
    COLLECTION_EXISTS = "RS-4002"

    # Search errors (6xxx)
    SEARCH_ERROR = "RS-6000"
    INVALID_REVIEW_PAYLOAD = "RS-6001"

    # Preference errors (8xxx)
    PREFERENCES_ERROR = "RS-8000"
    PREFERENCES_NOT_FOUND = "RS-8001"


class ReviewSearchError(Exception):
    """Base exception for all review search errors.

    Attributes:
        message: Human-readable error message, safe to return to clients.
        code: Structured error code.
        details: Additional error context. Logged, never returned.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.code.value,
        }


class ConfigurationError(ReviewSearchError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(ReviewSearchError):
    """Input validation error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class IngestError(ReviewSearchError):
    """Review file loading or indexing error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.REVIEW_PARSE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmbeddingError(ReviewSearchError):
    """Embedding model error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class VectorStoreError(ReviewSearchError):
    """Vector store operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class SearchError(ReviewSearchError):
    """Review search failed downstream."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SEARCH_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class PreferencesError(ReviewSearchError):
    """Preference storage error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.PREFERENCES_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
