"""Vector collection data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StoredVector(BaseModel):
    """A text with its metadata and embedding, as held by a vector collection.

    Attributes:
        id: Identifier assigned by the collection (None before submission).
        text: The original text.
        metadata: Metadata stored alongside the text, if any.
        embedding: The embedding vector.
    """

    id: str | None = Field(default=None, description="Collection-assigned identifier")
    text: str = Field(description="Original text")
    metadata: dict[str, Any] | None = Field(
        default=None,
        description="Metadata stored with the text",
    )
    embedding: list[float] = Field(description="Embedding vector")


class VectorSearchType(str, Enum):
    """How a vector search ranks and filters its results."""

    SIMILARITY = "similarity"
    SIMILARITY_SCORE_THRESHOLD = "similarity_score_threshold"
    MMR = "mmr"


class VectorSearchSettings(BaseModel):
    """Settings for a single vector search.

    Attributes:
        type: Search mode. Defaults to plain similarity.
        score_threshold: Minimum similarity score. Required for
            ``SIMILARITY_SCORE_THRESHOLD``; ignored otherwise unless the
            collection chooses to honour it.
        top_k: Number of results to return. Defaults to 4.
        fetch_k: Candidates considered before MMR re-ranking. Defaults to 20.
        lambda_mult: MMR trade-off between relevance (1.0) and
            diversity (0.0). Defaults to 0.5.
        filters: Exact-match metadata filters. Defaults to none.
    """

    model_config = ConfigDict(frozen=True)

    type: VectorSearchType = Field(
        default=VectorSearchType.SIMILARITY,
        description="Search mode",
    )
    score_threshold: float | None = Field(
        default=None,
        description="Minimum similarity score",
    )
    top_k: int = Field(default=4, ge=1, description="Number of results")
    fetch_k: int = Field(default=20, ge=1, description="MMR candidate pool size")
    lambda_mult: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="MMR relevance/diversity trade-off",
    )
    filters: dict[str, Any] | None = Field(
        default=None,
        description="Exact-match metadata filters",
    )


class VectorSearchRequest(BaseModel):
    """A similarity search request.

    Attributes:
        query_embeddings: Query vectors. Semantic search sends exactly one.
    """

    model_config = ConfigDict(frozen=True)

    query_embeddings: list[list[float]] = Field(description="Query vectors")


class SearchResult(BaseModel):
    """A single match from a vector similarity search.

    Attributes:
        id: Record identifier.
        score: Similarity score (higher is more similar).
        text: Stored text.
        metadata: Stored metadata.
        embedding: Stored vector, when the collection returns it.
    """

    id: str = Field(description="Record identifier")
    score: float = Field(description="Similarity score")
    text: str = Field(default="", description="Stored text")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Stored metadata",
    )
    embedding: list[float] | None = Field(default=None, description="Stored vector")


class VectorSearchResponse(BaseModel):
    """Ranked matches returned by a vector collection search."""

    items: list[SearchResult] = Field(default_factory=list, description="Ranked matches")
