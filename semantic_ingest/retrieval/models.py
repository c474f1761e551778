"""Retrieval data models."""

from typing import Any

from pydantic import BaseModel, Field


class RetrievalResult(BaseModel):
    """A document found by a retriever.

    Attributes:
        content: The stored document text.
        score: Similarity score (higher is more relevant).
        source: The ``source`` metadata field, or the stored id without one.
        metadata: Metadata stored with the document.
    """

    content: str = Field(description="Document text")
    score: float = Field(description="Similarity score")
    source: str = Field(description="Source identifier")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Stored metadata",
    )
