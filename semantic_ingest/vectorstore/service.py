"""Vector collection interface and Qdrant implementation."""

import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from uuid import UUID, uuid4

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    MatchValue,
    Mmr,
    NearestQuery,
    PointIdsList,
    PointStruct,
    VectorParams,
)

from semantic_ingest.config import QdrantSettings, get_settings
from semantic_ingest.exceptions import ErrorCode, VectorStoreError
from semantic_ingest.logging_config import get_logger
from semantic_ingest.observability.metrics import (
    track_search_results,
    track_vectorstore_operation,
)
from semantic_ingest.vectorstore.codec import decode_metadata, encode_metadata
from semantic_ingest.vectorstore.models import (
    SearchResult,
    StoredVector,
    VectorSearchRequest,
    VectorSearchResponse,
    VectorSearchSettings,
    VectorSearchType,
)

logger = get_logger(__name__)


class VectorCollection(ABC):
    """Abstract base class for vector collections.

    A collection stores texts with their metadata and embeddings, and
    supports keyed retrieval and similarity search over them.
    """

    @abstractmethod
    async def add(self, items: list[StoredVector]) -> list[str]:
        """Store items.

        Args:
            items: Items to store. Their ``id`` is ignored.

        Returns:
            Identifiers assigned to the items, in submission order.

        Raises:
            VectorStoreError: If storing fails.
        """
        ...

    @abstractmethod
    async def get(self, id: str) -> StoredVector | None:
        """Fetch a stored item by identifier.

        Args:
            id: Item identifier.

        Returns:
            The stored item, or None if no item has that identifier.
        """
        ...

    @abstractmethod
    async def search(
        self,
        request: VectorSearchRequest,
        settings: VectorSearchSettings,
    ) -> VectorSearchResponse:
        """Search for items similar to the request's query embedding.

        Args:
            request: Query embeddings.
            settings: Search mode and limits.

        Returns:
            Ranked matches.

        Raises:
            VectorStoreError: If search fails.
        """
        ...

    @abstractmethod
    async def delete(self, ids: list[str]) -> int:
        """Delete items by identifier.

        Args:
            ids: Identifiers to delete.

        Returns:
            Number of identifiers submitted for deletion.
        """
        ...

    @abstractmethod
    async def is_empty(self) -> bool:
        """Check whether the collection holds no items."""
        ...


@contextmanager
def _tracked(operation: str) -> Iterator[None]:
    """Record duration and outcome of a collection operation."""
    start = time.perf_counter()
    try:
        yield
    except Exception:
        track_vectorstore_operation(operation, time.perf_counter() - start, success=False)
        raise
    track_vectorstore_operation(operation, time.perf_counter() - start)


_MAX_POINT_ID = 2**64


def _point_id(value: str) -> int | str | None:
    """Convert a string to a Qdrant point id (unsigned 64-bit int or UUID).

    Returns None if Qdrant could never hold the id.
    """
    if value.isascii() and value.isdigit():
        number = int(value)
        return number if number < _MAX_POINT_ID else None
    try:
        UUID(value)
    except ValueError:
        return None
    return value


class QdrantVectorCollection(VectorCollection):
    """Vector collection backed by a single Qdrant collection.

    Points are stored with payload ``{"text": ..., "metadata": ...}``;
    metadata goes through the JSON-safe codec so binary values survive.
    """

    def __init__(
        self,
        collection_name: str | None = None,
        settings: QdrantSettings | None = None,
        client: AsyncQdrantClient | None = None,
    ) -> None:
        """Initialize the Qdrant collection.

        Args:
            collection_name: Collection to operate on (default from settings).
            settings: Qdrant configuration.
            client: Existing client (for testing).
        """
        self._settings = settings or get_settings().qdrant
        self._collection = collection_name or self._settings.collection_name
        self._client = client
        self._owns_client = client is None

    @property
    def name(self) -> str:
        """Get the collection name."""
        return self._collection

    async def _get_client(self) -> AsyncQdrantClient:
        """Get or create Qdrant client."""
        if self._client is None:
            api_key = None
            if self._settings.api_key:
                api_key = self._settings.api_key.get_secret_value()

            self._client = AsyncQdrantClient(
                url=self._settings.url,
                api_key=api_key,
            )
        return self._client

    async def close(self) -> None:
        """Close the Qdrant client."""
        if self._owns_client and self._client is not None:
            await self._client.close()
            self._client = None

    async def ensure_collection(self, dimensions: int) -> bool:
        """Create the collection if it does not exist.

        Args:
            dimensions: Vector dimensions.

        Returns:
            True if the collection was created, False if it already existed.
        """
        client = await self._get_client()

        try:
            if await client.collection_exists(self._collection):
                return False

            await client.create_collection(
                collection_name=self._collection,
                vectors_config=VectorParams(
                    size=dimensions,
                    distance=Distance.COSINE,
                ),
            )
            logger.info(
                f"Created collection: {self._collection}",
                extra={"dimensions": dimensions},
            )
            return True

        except Exception as e:
            raise VectorStoreError(
                f"Failed to create collection: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": self._collection, "error": str(e)},
            ) from e

    async def add(self, items: list[StoredVector]) -> list[str]:
        """Upsert items as new points with fresh UUIDs."""
        if not items:
            return []

        client = await self._get_client()
        ids = [str(uuid4()) for _ in items]
        points = [
            PointStruct(
                id=point_id,
                vector=item.embedding,
                payload={
                    "text": item.text,
                    "metadata": encode_metadata(item.metadata),
                },
            )
            for point_id, item in zip(ids, items, strict=True)
        ]

        try:
            with _tracked("add"):
                await client.upsert(collection_name=self._collection, points=points)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to add items: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": self._collection, "error": str(e)},
            ) from e

        logger.debug(
            f"Added {len(points)} items",
            extra={"collection": self._collection},
        )
        return ids

    async def get(self, id: str) -> StoredVector | None:
        """Retrieve a point by id; ids Qdrant could never hold yield None."""
        point_id = _point_id(id)
        if point_id is None:
            return None

        client = await self._get_client()

        try:
            with _tracked("get"):
                records = await client.retrieve(
                    collection_name=self._collection,
                    ids=[point_id],
                    with_payload=True,
                    with_vectors=True,
                )
        except Exception as e:
            raise VectorStoreError(
                f"Failed to get item: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": self._collection, "id": id, "error": str(e)},
            ) from e

        if not records:
            return None

        record = records[0]
        payload = dict(record.payload) if record.payload else {}
        vector = record.vector if isinstance(record.vector, list) else []
        return StoredVector(
            id=str(record.id),
            text=payload.get("text", ""),
            metadata=decode_metadata(payload.get("metadata")),
            embedding=vector,
        )

    async def search(
        self,
        request: VectorSearchRequest,
        settings: VectorSearchSettings,
    ) -> VectorSearchResponse:
        """Query the nearest points to the first query embedding."""
        if not request.query_embeddings:
            return VectorSearchResponse()

        client = await self._get_client()
        vector = request.query_embeddings[0]

        query: Any = vector
        if settings.type == VectorSearchType.MMR:
            query = NearestQuery(
                nearest=vector,
                mmr=Mmr(
                    diversity=1.0 - settings.lambda_mult,
                    candidates_limit=max(settings.fetch_k, settings.top_k),
                ),
            )

        try:
            with _tracked("search"):
                results = await client.query_points(
                    collection_name=self._collection,
                    query=query,
                    limit=settings.top_k,
                    query_filter=self._build_filter(settings.filters),
                    score_threshold=settings.score_threshold,
                    with_payload=True,
                )
        except Exception as e:
            raise VectorStoreError(
                f"Failed to search: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": self._collection, "error": str(e)},
            ) from e

        items: list[SearchResult] = []
        for point in results.points:
            payload = dict(point.payload) if point.payload else {}
            items.append(
                SearchResult(
                    id=str(point.id),
                    score=point.score if point.score is not None else 0.0,
                    text=payload.get("text", ""),
                    metadata=decode_metadata(payload.get("metadata")) or {},
                )
            )

        track_search_results(len(items), items[0].score if items else 0.0)
        return VectorSearchResponse(items=items)

    def _build_filter(self, filters: dict[str, Any] | None) -> Filter | None:
        """Translate exact-match metadata filters into a Qdrant filter."""
        if not filters:
            return None
        conditions = [
            FieldCondition(key=f"metadata.{key}", match=MatchValue(value=value))
            for key, value in filters.items()
        ]
        return Filter(must=conditions)  # type: ignore[arg-type]

    async def delete(self, ids: list[str]) -> int:
        """Delete points by id."""
        if not ids:
            return 0

        client = await self._get_client()

        try:
            with _tracked("delete"):
                await client.delete(
                    collection_name=self._collection,
                    points_selector=PointIdsList(points=ids),  # type: ignore[arg-type]
                )
        except Exception as e:
            raise VectorStoreError(
                f"Failed to delete items: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": self._collection, "error": str(e)},
            ) from e

        logger.debug(
            f"Deleted {len(ids)} items",
            extra={"collection": self._collection},
        )
        return len(ids)

    async def is_empty(self) -> bool:
        """Check whether the collection holds no points."""
        client = await self._get_client()

        try:
            with _tracked("count"):
                result = await client.count(collection_name=self._collection, exact=True)
        except Exception as e:
            raise VectorStoreError(
                f"Failed to count items: {e}",
                code=ErrorCode.VECTOR_STORE_ERROR,
                details={"collection": self._collection, "error": str(e)},
            ) from e

        return result.count == 0
