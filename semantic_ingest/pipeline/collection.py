"""Semantic ingest and search over a vector collection.

Free functions that take the vector collection and the embedding model as
explicit arguments, plus ``SemanticCollection``, a thin adapter binding
the two together. Neither keeps state between calls.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from semantic_ingest.config import EmbeddingSettings, get_settings
from semantic_ingest.documents.models import Document
from semantic_ingest.embeddings.models import EmbeddingRequest, EmbeddingResponse
from semantic_ingest.embeddings.service import EmbeddingModel
from semantic_ingest.exceptions import EmbeddingError, ErrorCode, ValidationError
from semantic_ingest.logging_config import get_logger
from semantic_ingest.pipeline.assembler import build_embedding_request
from semantic_ingest.vectorstore.models import (
    StoredVector,
    VectorSearchRequest,
    VectorSearchResponse,
    VectorSearchSettings,
    VectorSearchType,
)
from semantic_ingest.vectorstore.service import VectorCollection

logger = get_logger(__name__)


def _require(value: Any, name: str) -> None:
    if value is None:
        raise ValidationError(f"{name} is required", details={"argument": name})


def default_search_settings() -> VectorSearchSettings:
    """Build plain similarity search settings from the configured defaults."""
    defaults = get_settings().search
    return VectorSearchSettings(
        type=VectorSearchType.SIMILARITY,
        top_k=defaults.top_k,
        fetch_k=defaults.fetch_k,
        lambda_mult=defaults.lambda_mult,
    )


def validate_search_settings(settings: VectorSearchSettings) -> None:
    """Check that the search mode has the parameters it needs.

    Raises:
        ValidationError: If score-threshold search has no threshold.
    """
    if (
        settings.type == VectorSearchType.SIMILARITY_SCORE_THRESHOLD
        and settings.score_threshold is None
    ):
        raise ValidationError(
            f"score_threshold required for {settings.type.value}",
            details={"type": settings.type.value},
        )


async def embed_request(
    model: EmbeddingModel,
    request: EmbeddingRequest,
    settings: EmbeddingSettings | None = None,
) -> EmbeddingResponse:
    """Make the single embedding call for a request.

    Model errors propagate unchanged. The only check added here is that
    the model kept its promise of one vector per text.

    Raises:
        EmbeddingError: If the model returned a different number of vectors.
    """
    embeddings = await model.create_embeddings(request, settings)

    if len(embeddings) != len(request.texts):
        raise EmbeddingError(
            f"Embedding model returned {len(embeddings)} vectors "
            f"for {len(request.texts)} texts",
            code=ErrorCode.EMBEDDING_CONTRACT_VIOLATION,
            details={"expected": len(request.texts), "actual": len(embeddings)},
        )
    return embeddings


async def add_texts(
    collection: VectorCollection,
    model: EmbeddingModel,
    texts: Sequence[str],
    metadatas: Sequence[Mapping[str, Any] | None] | None = None,
    embedding_settings: EmbeddingSettings | None = None,
) -> list[str]:
    """Embed texts in one batch and store them in one call.

    Args:
        collection: Collection to store into.
        model: Embedding model.
        texts: Texts to embed and store.
        metadatas: Metadata per text, parallel to ``texts``.
        embedding_settings: Per-call embedding overrides.

    Returns:
        Identifiers assigned by the collection, in input order.
    """
    _require(collection, "collection")
    _require(model, "model")

    request = build_embedding_request(texts, metadatas)
    embeddings = await embed_request(model, request, embedding_settings)

    items = [
        StoredVector(
            text=text,
            metadata=dict(metadatas[i] or {}) if metadatas is not None else None,
            embedding=embeddings[i],
        )
        for i, text in enumerate(request.texts)
    ]
    ids = await collection.add(items)

    logger.debug(
        f"Stored {len(items)} texts",
        extra={"attachments": len(request.attachments)},
    )
    return ids


async def add_documents(
    collection: VectorCollection,
    model: EmbeddingModel,
    documents: Sequence[Document],
    embedding_settings: EmbeddingSettings | None = None,
) -> list[str]:
    """Embed and store documents; see ``add_texts``."""
    _require(collection, "collection")
    _require(model, "model")
    _require(documents, "documents")

    return await add_texts(
        collection,
        model,
        texts=[document.content for document in documents],
        metadatas=[document.metadata for document in documents],
        embedding_settings=embedding_settings,
    )


async def get_document_by_id(
    collection: VectorCollection,
    id: str,
) -> Document | None:
    """Fetch a stored document by identifier.

    Returns:
        The document, or None if the collection has nothing under ``id``.
    """
    _require(collection, "collection")
    _require(id, "id")

    item = await collection.get(id)
    if item is None:
        return None
    return Document(content=item.text, metadata=dict(item.metadata or {}))


async def search(
    collection: VectorCollection,
    model: EmbeddingModel,
    embedding_request: EmbeddingRequest,
    embedding_settings: EmbeddingSettings | None = None,
    search_settings: VectorSearchSettings | None = None,
) -> VectorSearchResponse:
    """Return stored items most similar to the embedded request.

    Search settings are validated before the embedding call, so an invalid
    mode never costs an inference.

    Args:
        collection: Collection to search.
        model: Embedding model.
        embedding_request: The query; must hold exactly one text.
        embedding_settings: Per-call embedding overrides.
        search_settings: Search mode and limits (configured defaults if None).

    Returns:
        The collection's response, unmodified.

    Raises:
        ValidationError: If the request does not hold exactly one text, or
            the search settings are incomplete.
    """
    _require(collection, "collection")
    _require(model, "model")
    _require(embedding_request, "embedding_request")
    if len(embedding_request.texts) != 1:
        raise ValidationError(
            "embedding_request must contain exactly one query text",
            details={
                "argument": "embedding_request",
                "texts": len(embedding_request.texts),
            },
        )

    search_settings = search_settings or default_search_settings()
    validate_search_settings(search_settings)

    embeddings = await embed_request(model, embedding_request, embedding_settings)
    request = VectorSearchRequest(query_embeddings=[embeddings[0]])

    return await collection.search(request, search_settings)


async def search_by_text(
    collection: VectorCollection,
    model: EmbeddingModel,
    query: str,
    embedding_settings: EmbeddingSettings | None = None,
    search_settings: VectorSearchSettings | None = None,
) -> VectorSearchResponse:
    """Search with a single query text; see ``search``."""
    _require(query, "query")
    return await search(
        collection,
        model,
        EmbeddingRequest.from_text(query),
        embedding_settings=embedding_settings,
        search_settings=search_settings,
    )


class SemanticCollection:
    """A vector collection paired with the embedding model that fills it.

    Delegates to the module-level functions; holds only its two
    collaborators and optional embedding overrides.
    """

    def __init__(
        self,
        collection: VectorCollection,
        model: EmbeddingModel,
        embedding_settings: EmbeddingSettings | None = None,
    ) -> None:
        _require(collection, "collection")
        _require(model, "model")
        self._collection = collection
        self._model = model
        self._embedding_settings = embedding_settings

    @property
    def collection(self) -> VectorCollection:
        return self._collection

    @property
    def model(self) -> EmbeddingModel:
        return self._model

    async def add_texts(
        self,
        texts: Sequence[str],
        metadatas: Sequence[Mapping[str, Any] | None] | None = None,
    ) -> list[str]:
        return await add_texts(
            self._collection, self._model, texts, metadatas, self._embedding_settings
        )

    async def add_documents(self, documents: Sequence[Document]) -> list[str]:
        return await add_documents(
            self._collection, self._model, documents, self._embedding_settings
        )

    async def get_document_by_id(self, id: str) -> Document | None:
        return await get_document_by_id(self._collection, id)

    async def search(
        self,
        embedding_request: EmbeddingRequest,
        search_settings: VectorSearchSettings | None = None,
    ) -> VectorSearchResponse:
        return await search(
            self._collection,
            self._model,
            embedding_request,
            embedding_settings=self._embedding_settings,
            search_settings=search_settings,
        )

    async def search_by_text(
        self,
        query: str,
        search_settings: VectorSearchSettings | None = None,
    ) -> VectorSearchResponse:
        return await search_by_text(
            self._collection,
            self._model,
            query,
            embedding_settings=self._embedding_settings,
            search_settings=search_settings,
        )

    async def delete(self, ids: list[str]) -> int:
        """Delete stored documents by identifier."""
        return await self._collection.delete(ids)
