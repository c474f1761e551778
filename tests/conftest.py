"""Pytest configuration and shared fixtures."""

import pytest

from semantic_ingest.config import EmbeddingSettings
from semantic_ingest.embeddings.models import EmbeddingRequest, EmbeddingResponse
from semantic_ingest.embeddings.service import EmbeddingModel
from semantic_ingest.vectorstore.models import (
    SearchResult,
    StoredVector,
    VectorSearchRequest,
    VectorSearchResponse,
    VectorSearchSettings,
)
from semantic_ingest.vectorstore.service import VectorCollection


class IndexEmbeddingModel(EmbeddingModel):
    """Stub model whose vector for text ``i`` is ``[i, len(text)]``.

    Records every request it receives.
    """

    def __init__(self) -> None:
        self.requests: list[EmbeddingRequest] = []
        self.settings: list[EmbeddingSettings | None] = []

    async def create_embeddings(
        self,
        request: EmbeddingRequest,
        settings: EmbeddingSettings | None = None,
    ) -> EmbeddingResponse:
        self.requests.append(request)
        self.settings.append(settings)
        return [[float(i), float(len(text))] for i, text in enumerate(request.texts)]


class DictVectorCollection(VectorCollection):
    """Dict-backed collection that records calls and ranks nothing.

    ``search`` returns every stored item with score 1.0, in insertion order.
    """

    def __init__(self) -> None:
        self.items: dict[str, StoredVector] = {}
        self.add_calls: list[list[StoredVector]] = []
        self.search_calls: list[tuple[VectorSearchRequest, VectorSearchSettings]] = []

    async def add(self, items: list[StoredVector]) -> list[str]:
        self.add_calls.append(items)
        ids = []
        for item in items:
            item_id = f"id-{len(self.items)}"
            self.items[item_id] = item.model_copy(update={"id": item_id})
            ids.append(item_id)
        return ids

    async def get(self, id: str) -> StoredVector | None:
        return self.items.get(id)

    async def search(
        self,
        request: VectorSearchRequest,
        settings: VectorSearchSettings,
    ) -> VectorSearchResponse:
        self.search_calls.append((request, settings))
        return VectorSearchResponse(
            items=[
                SearchResult(
                    id=item_id,
                    score=1.0,
                    text=item.text,
                    metadata=item.metadata or {},
                )
                for item_id, item in list(self.items.items())[: settings.top_k]
            ]
        )

    async def delete(self, ids: list[str]) -> int:
        for item_id in ids:
            self.items.pop(item_id, None)
        return len(ids)

    async def is_empty(self) -> bool:
        return not self.items


@pytest.fixture
def embedding_model() -> IndexEmbeddingModel:
    """Index-encoding stub embedding model."""
    return IndexEmbeddingModel()


@pytest.fixture
def vector_collection() -> DictVectorCollection:
    """Empty dict-backed vector collection."""
    return DictVectorCollection()
