"""Retriever interface and implementations."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from semantic_ingest.exceptions import ErrorCode, RetrievalError, ValidationError
from semantic_ingest.logging_config import get_logger
from semantic_ingest.pipeline.collection import SemanticCollection, default_search_settings
from semantic_ingest.retrieval.models import RetrievalResult
from semantic_ingest.vectorstore.models import VectorSearchSettings

logger = get_logger(__name__)


class Retriever(ABC):
    """Abstract base class for retrievers.

    Defines the interface for retrieving relevant documents.
    """

    @abstractmethod
    async def retrieve(
        self,
        query: str,
        top_k: int | None = None,
        filters: dict[str, Any] | None = None,
    ) -> list[RetrievalResult]:
        """Retrieve relevant documents for a query.

        Args:
            query: The search query.
            top_k: Maximum number of results (settings default if None).
            filters: Optional metadata filters.

        Returns:
            List of retrieval results ordered by relevance.

        Raises:
            RetrievalError: If retrieval fails.
        """
        ...


class SemanticRetriever(Retriever):
    """Semantic search retriever over a ``SemanticCollection``.

    Embeds the query and runs it through the collection's search path.
    """

    def __init__(
        self,
        collection: SemanticCollection,
        search_settings: VectorSearchSettings | None = None,
    ) -> None:
        """Initialize the semantic retriever.

        Args:
            collection: Collection and embedding model to search with.
            search_settings: Base search settings (configured defaults if None).
        """
        self._collection = collection
        self._search_settings = search_settings or default_search_settings()

    async def retrieve(
        self,
        query: str,
        top_k: int | None = None,
        filters: dict[str, Any] | None = None,
    ) -> list[RetrievalResult]:
        """Retrieve documents using semantic similarity.

        Args:
            query: The search query.
            top_k: Maximum number of results.
            filters: Optional metadata filters.

        Returns:
            List of relevant results.

        Raises:
            ValidationError: If the overrides are invalid or the search
                settings are incomplete.
            RetrievalError: If retrieval fails.
        """
        if not query.strip():
            return []

        overrides: dict[str, Any] = {}
        if top_k is not None:
            overrides["top_k"] = top_k
        if filters is not None:
            overrides["filters"] = filters
        try:
            settings = VectorSearchSettings.model_validate(
                {**self._search_settings.model_dump(), **overrides}
            )
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid search overrides: {e.error_count()} error(s)",
                details={
                    "overrides": sorted(overrides),
                    "errors": [err["msg"] for err in e.errors()],
                },
            ) from e

        try:
            response = await self._collection.search_by_text(query, settings)
        except ValidationError:
            raise
        except Exception as e:
            logger.error(f"Retrieval failed: {e}")
            raise RetrievalError(
                f"Failed to retrieve documents: {e}",
                code=ErrorCode.RETRIEVAL_ERROR,
                details={"query": query[:100], "error": str(e)},
            ) from e

        results = [
            RetrievalResult(
                content=item.text,
                score=item.score,
                source=str(item.metadata.get("source", item.id)),
                metadata=item.metadata,
            )
            for item in response.items
        ]

        logger.debug(
            f"Retrieved {len(results)} results for query",
            extra={
                "query_length": len(query),
                "top_k": settings.top_k,
                "results_count": len(results),
            },
        )

        return results
