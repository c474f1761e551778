"""Tests for library exceptions."""

from semantic_ingest.exceptions import (
    ConfigurationError,
    EmbeddingError,
    ErrorCode,
    RetrievalError,
    SemanticIngestError,
    ValidationError,
    VectorStoreError,
)


class TestErrorCode:
    """Tests for error codes."""

    def test_error_code_format(self) -> None:
        """Error codes follow SI-XXXX format."""
        for code in ErrorCode:
            assert code.value.startswith("SI-")
            assert len(code.value) == 7  # SI-XXXX

    def test_error_code_uniqueness(self) -> None:
        """All error codes are unique."""
        codes = [code.value for code in ErrorCode]
        assert len(codes) == len(set(codes))


class TestSemanticIngestError:
    """Tests for base exception."""

    def test_basic_exception(self) -> None:
        """Base exception stores message and code."""
        error = SemanticIngestError("Something went wrong")
        assert error.message == "Something went wrong"
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert error.details == {}

    def test_exception_with_details(self) -> None:
        """Exception can have additional details."""
        error = SemanticIngestError(
            "Validation failed",
            code=ErrorCode.VALIDATION_ERROR,
            details={"argument": "collection"},
        )
        assert error.details == {"argument": "collection"}

    def test_to_dict(self) -> None:
        """Exception converts to a serializable dict."""
        error = SemanticIngestError(
            "Something went wrong",
            code=ErrorCode.INTERNAL_ERROR,
            details={"trace_id": "abc123"},
        )

        assert error.to_dict() == {
            "error": {
                "code": "SI-1000",
                "message": "Something went wrong",
                "details": {"trace_id": "abc123"},
            }
        }

    def test_str_representation(self) -> None:
        """Exception string is the message."""
        assert str(SemanticIngestError("Test error")) == "Test error"


class TestSubclasses:
    """Tests for the concrete exception types."""

    def test_configuration_error(self) -> None:
        """ConfigurationError has correct default code."""
        error = ConfigurationError("Missing env var")
        assert error.code == ErrorCode.CONFIGURATION_ERROR
        assert isinstance(error, SemanticIngestError)

    def test_validation_error(self) -> None:
        """ValidationError has correct default code."""
        error = ValidationError("score_threshold required")
        assert error.code == ErrorCode.VALIDATION_ERROR

    def test_embedding_error(self) -> None:
        """EmbeddingError defaults to service error."""
        error = EmbeddingError("Service unavailable")
        assert error.code == ErrorCode.EMBEDDING_SERVICE_ERROR

    def test_embedding_contract_violation(self) -> None:
        """EmbeddingError can indicate a broken length contract."""
        error = EmbeddingError(
            "Wrong number of vectors",
            code=ErrorCode.EMBEDDING_CONTRACT_VIOLATION,
        )
        assert error.code == ErrorCode.EMBEDDING_CONTRACT_VIOLATION

    def test_vector_store_error(self) -> None:
        """VectorStoreError can have custom code."""
        assert VectorStoreError("boom").code == ErrorCode.VECTOR_STORE_ERROR
        error = VectorStoreError(
            "Collection not found",
            code=ErrorCode.COLLECTION_NOT_FOUND,
        )
        assert error.code == ErrorCode.COLLECTION_NOT_FOUND

    def test_retrieval_error(self) -> None:
        """RetrievalError has correct default code."""
        assert RetrievalError("Search failed").code == ErrorCode.RETRIEVAL_ERROR
