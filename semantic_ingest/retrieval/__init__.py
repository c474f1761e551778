"""Retrieval module."""

from semantic_ingest.retrieval.models import RetrievalResult
from semantic_ingest.retrieval.retriever import Retriever, SemanticRetriever

__all__ = [
    "Retriever",
    "RetrievalResult",
    "SemanticRetriever",
]

