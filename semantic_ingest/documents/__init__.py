"""Document models."""

from semantic_ingest.documents.models import Document

__all__ = [
    "Document",
]
