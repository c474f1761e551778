"""Ingest and search pipeline over an embedding model and a vector collection."""

from semantic_ingest.pipeline.assembler import attachment_for_text, build_embedding_request
from semantic_ingest.pipeline.collection import (
    SemanticCollection,
    add_documents,
    add_texts,
    default_search_settings,
    embed_request,
    get_document_by_id,
    search,
    search_by_text,
    validate_search_settings,
)

__all__ = [
    "SemanticCollection",
    "add_documents",
    "add_texts",
    "attachment_for_text",
    "build_embedding_request",
    "default_search_settings",
    "embed_request",
    "get_document_by_id",
    "search",
    "search_by_text",
    "validate_search_settings",
]
