"""Document data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A piece of text with its metadata, as produced by a document loader.

    Attributes:
        content: The text content of the document.
        metadata: Arbitrary metadata. May hold binary attachments keyed by
            the document's own content (see ``attachment_for_text``).
    """

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Text content of the document")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Document metadata",
    )

    @classmethod
    def from_text(cls, content: str, **metadata: Any) -> "Document":
        """Create a document from text content and keyword metadata.

        Args:
            content: The text content.
            **metadata: Metadata fields.

        Returns:
            New Document instance.
        """
        return cls(content=content, metadata=metadata)
