"""Assembly of batched embedding requests from texts and metadata."""

from collections.abc import Mapping, Sequence
from typing import Any

from semantic_ingest.embeddings.models import EmbeddingRequest
from semantic_ingest.logging_config import get_logger

logger = get_logger(__name__)

BINARY_TYPES = (bytes, bytearray, memoryview)


def attachment_for_text(text: str, metadata: Mapping[str, Any] | None) -> bytes | None:
    """Find the binary attachment of a text in its metadata.

    The attachment is stored under the text itself as the key. This is an
    odd convention, but ingest behaviour depends on it; keep lookups going
    through this helper so it stays in one place.

    Args:
        text: The document text, used as the metadata key.
        metadata: The document's metadata.

    Returns:
        The attachment bytes, or None if absent or not binary.
    """
    if not metadata:
        return None
    value = metadata.get(text)
    if isinstance(value, BINARY_TYPES):
        return bytes(value)
    return None


def build_embedding_request(
    texts: Sequence[str],
    metadatas: Sequence[Mapping[str, Any] | None] | None = None,
) -> EmbeddingRequest:
    """Build one embedding request for a batch of texts.

    Attachments are collected only for texts whose metadata holds one, so
    the resulting ``attachments`` list is not aligned with ``texts``.

    Args:
        texts: Texts to embed, in order.
        metadatas: Metadata per text, parallel to ``texts``.

    Returns:
        The assembled request.

    Raises:
        IndexError: If ``metadatas`` and ``texts`` differ in length.
    """
    attachments: list[bytes] = []
    if metadatas is not None:
        for i in range(max(len(texts), len(metadatas))):
            attachment = attachment_for_text(texts[i], metadatas[i])
            if attachment is not None:
                attachments.append(attachment)

    logger.debug(
        "Assembled embedding request",
        extra={"texts": len(texts), "attachments": len(attachments)},
    )
    return EmbeddingRequest(texts=list(texts), attachments=attachments)
