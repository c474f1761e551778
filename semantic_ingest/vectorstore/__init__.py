"""Vector collection module."""

from semantic_ingest.vectorstore.models import (
    SearchResult,
    StoredVector,
    VectorSearchRequest,
    VectorSearchResponse,
    VectorSearchSettings,
    VectorSearchType,
)
from semantic_ingest.vectorstore.service import QdrantVectorCollection, VectorCollection

__all__ = [
    "QdrantVectorCollection",
    "SearchResult",
    "StoredVector",
    "VectorCollection",
    "VectorSearchRequest",
    "VectorSearchResponse",
    "VectorSearchSettings",
    "VectorSearchType",
]
