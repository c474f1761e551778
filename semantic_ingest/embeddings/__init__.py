"""Embedding model module."""

from semantic_ingest.embeddings.models import EmbeddingRequest, EmbeddingResponse
from semantic_ingest.embeddings.service import EmbeddingModel, HTTPEmbeddingModel

__all__ = [
    "EmbeddingModel",
    "EmbeddingRequest",
    "EmbeddingResponse",
    "HTTPEmbeddingModel",
]
