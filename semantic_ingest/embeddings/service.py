"""Embedding model interface and HTTP implementation."""

import base64
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from semantic_ingest.config import EmbeddingSettings, get_settings
from semantic_ingest.embeddings.models import EmbeddingRequest, EmbeddingResponse
from semantic_ingest.exceptions import EmbeddingError, ErrorCode
from semantic_ingest.logging_config import get_logger
from semantic_ingest.observability.metrics import track_embedding_request

logger = get_logger(__name__)


class EmbeddingModel(ABC):
    """Abstract base class for embedding models.

    Implementations must return exactly one vector per ``request.texts``
    entry, in the same order. Callers zip the result back onto their
    inputs by position.
    """

    @abstractmethod
    async def create_embeddings(
        self,
        request: EmbeddingRequest,
        settings: EmbeddingSettings | None = None,
    ) -> EmbeddingResponse:
        """Generate embeddings for a batched request.

        Args:
            request: Texts and optional binary attachments.
            settings: Per-call overrides (model, dimensions, ...).

        Returns:
            One vector per input text, in input order.

        Raises:
            EmbeddingError: If embedding fails.
        """
        ...


class HTTPEmbeddingModel(EmbeddingModel):
    """Embedding model served over HTTP.

    Compatible with OpenAI-style embedding APIs and
    text-embeddings-inference (TEI) servers.
    """

    # Known model dimensions
    MODEL_DIMENSIONS = {
        "BAAI/bge-large-en-v1.5": 1024,
        "BAAI/bge-base-en-v1.5": 768,
        "BAAI/bge-small-en-v1.5": 384,
        "text-embedding-ada-002": 1536,
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
    }

    def __init__(
        self,
        settings: EmbeddingSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP embedding model.

        Args:
            settings: Embedding configuration. Uses defaults if not provided.
            client: HTTP client. Creates new one if not provided.
        """
        self._settings = settings or get_settings().embedding
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def model_name(self) -> str:
        """Get the model name."""
        return self._settings.model

    @property
    def dimensions(self) -> int:
        """Get embedding dimensions."""
        if self._settings.dimensions is not None:
            return self._settings.dimensions
        return self.MODEL_DIMENSIONS.get(self._settings.model, 1024)

    async def create_embeddings(
        self,
        request: EmbeddingRequest,
        settings: EmbeddingSettings | None = None,
    ) -> EmbeddingResponse:
        """Generate embeddings for all texts of a request.

        Texts are split into ``batch_size`` chunks. A request carrying
        attachments is sent whole, since attachments do not line up with
        individual texts.
        """
        if not request.texts:
            return []

        effective = settings or self._settings
        client = await self._get_client()
        url = f"{effective.base_url}/embeddings"

        if request.attachments:
            batches = [request.texts]
        else:
            size = effective.batch_size
            batches = [
                request.texts[i : i + size]
                for i in range(0, len(request.texts), size)
            ]

        embeddings: EmbeddingResponse = []
        for batch in batches:
            payload = self._build_payload(batch, request.attachments, effective)
            embeddings.extend(await self._send(client, url, payload, len(batch), effective))

        return embeddings

    def _build_payload(
        self,
        texts: list[str],
        attachments: list[bytes],
        settings: EmbeddingSettings,
    ) -> dict[str, Any]:
        """Build the JSON body for one embedding request."""
        payload: dict[str, Any] = {
            "input": texts,
            "model": settings.model,
        }
        if settings.dimensions is not None:
            payload["dimensions"] = settings.dimensions
        if attachments:
            payload["images"] = [
                base64.b64encode(data).decode("ascii") for data in attachments
            ]
        return payload

    async def _send(
        self,
        client: httpx.AsyncClient,
        url: str,
        payload: dict[str, Any],
        expected: int,
        settings: EmbeddingSettings,
    ) -> EmbeddingResponse:
        """Make one embedding request.

        Args:
            client: HTTP client.
            url: Embedding endpoint URL.
            payload: Request body.
            expected: Number of texts in the body.
            settings: Effective settings for the call.

        Returns:
            Vectors in input order.

        Raises:
            EmbeddingError: If the request fails or the response is malformed.
        """
        start = time.perf_counter()
        try:
            response = await client.post(url, json=payload, timeout=settings.timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            track_embedding_request(
                settings.model, time.perf_counter() - start, expected, success=False
            )
            logger.error(
                f"Embedding request failed: {e.response.status_code}",
                extra={"url": url, "status": e.response.status_code},
            )
            raise EmbeddingError(
                f"Embedding service returned {e.response.status_code}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            track_embedding_request(
                settings.model, time.perf_counter() - start, expected, success=False
            )
            logger.error(
                f"Embedding request error: {e}",
                extra={"url": url},
            )
            raise EmbeddingError(
                f"Failed to connect to embedding service: {e}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"url": url},
            ) from e

        try:
            data = response.json()
            items = data["data"]
            # OpenAI responses carry an explicit index; honour it over list order
            if all("index" in item for item in items):
                items = sorted(items, key=lambda item: item["index"])
            vectors = [[float(x) for x in item["embedding"]] for item in items]
        except (KeyError, TypeError, ValueError) as e:
            track_embedding_request(
                settings.model, time.perf_counter() - start, expected, success=False
            )
            raise EmbeddingError(
                f"Invalid response from embedding service: {e}",
                code=ErrorCode.EMBEDDING_SERVICE_ERROR,
                details={"error": str(e)},
            ) from e

        track_embedding_request(settings.model, time.perf_counter() - start, expected)
        logger.debug(
            f"Embedded {len(vectors)} texts",
            extra={"model": settings.model, "batch_size": expected},
        )
        return vectors
