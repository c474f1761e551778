"""Library exception hierarchy.

All custom exceptions inherit from SemanticIngestError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "SI-1000"
    CONFIGURATION_ERROR = "SI-1001"
    VALIDATION_ERROR = "SI-1002"

    # Embedding errors (3xxx)
    EMBEDDING_SERVICE_ERROR = "SI-3000"
    EMBEDDING_CONTRACT_VIOLATION = "SI-3001"

    # Vector store errors (4xxx)
    VECTOR_STORE_ERROR = "SI-4000"
    COLLECTION_NOT_FOUND = "SI-4001"
    COLLECTION_EXISTS = "SI-4002"

    # Retrieval errors (6xxx)
    RETRIEVAL_ERROR = "SI-6000"


class SemanticIngestError(Exception):
    """Base exception for all library errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
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
        """Convert exception to a serializable dictionary."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(SemanticIngestError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationError(SemanticIngestError):
    """Argument or settings validation error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.VALIDATION_ERROR, details)


class EmbeddingError(SemanticIngestError):
    """Embedding model error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.EMBEDDING_SERVICE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class VectorStoreError(SemanticIngestError):
    """Vector collection operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VECTOR_STORE_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class RetrievalError(SemanticIngestError):
    """Retrieval operation error."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RETRIEVAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
