"""Tests for application exceptions."""

from src.api.app import get_status_code
from src.exceptions import (
    ConfigurationError,
    EmbeddingError,
    ErrorCode,
    IngestError,
    PreferencesError,
    ReviewSearchError,
    SearchError,
    ValidationError,
    VectorStoreError,
)


class TestErrorCode:
    """Tests for error codes."""

    def test_error_code_format(self) -> None:
        """Error codes follow RS-XXXX format."""
        for code in ErrorCode:
            assert code.value.startswith("RS-")
            assert len(code.value) == 7

    def test_error_code_uniqueness(self) -> None:
        codes = [code.value for code in ErrorCode]
        assert len(codes) == len(set(codes))


class TestReviewSearchError:
    """Tests for base exception."""

    def test_basic_exception(self) -> None:
        error = ReviewSearchError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_to_dict_omits_details(self) -> None:
        """Details stay server-side."""
        error = ReviewSearchError(
            "Failed to perform search",
            code=ErrorCode.SEARCH_ERROR,
            details={"error": "connection refused"},
        )
        assert error.to_dict() == {"error": "Failed to perform search", "code": "RS-6000"}


class TestExceptionSubclasses:
    def test_fixed_codes(self) -> None:
        assert ConfigurationError("x").code == ErrorCode.CONFIGURATION_ERROR
        assert ValidationError("x").code == ErrorCode.VALIDATION_ERROR

    def test_default_codes(self) -> None:
        assert EmbeddingError("x").code == ErrorCode.EMBEDDING_SERVICE_ERROR
        assert VectorStoreError("x").code == ErrorCode.VECTOR_STORE_ERROR
        assert SearchError("x").code == ErrorCode.SEARCH_ERROR
        assert PreferencesError("x").code == ErrorCode.PREFERENCES_ERROR
        assert IngestError("x").code == ErrorCode.REVIEW_PARSE_ERROR

    def test_all_inherit_from_base(self) -> None:
        for cls in (EmbeddingError, VectorStoreError, SearchError, PreferencesError):
            assert isinstance(cls("x"), ReviewSearchError)


class TestStatusCodes:
    def test_mapping(self) -> None:
        assert get_status_code(ErrorCode.VALIDATION_ERROR) == 400
        assert get_status_code(ErrorCode.PREFERENCES_NOT_FOUND) == 404
        assert get_status_code(ErrorCode.COLLECTION_EXISTS) == 409
        assert get_status_code(ErrorCode.SEARCH_ERROR) == 500
        assert get_status_code(ErrorCode.COLLECTION_NOT_FOUND) == 500
        assert get_status_code(ErrorCode.INVALID_REVIEW_PAYLOAD) == 500
