"""Embedding data models."""

from pydantic import BaseModel, ConfigDict, Field

# One vector per input text, in input order.
EmbeddingResponse = list[list[float]]


class EmbeddingRequest(BaseModel):
    """A batched embedding request.

    ``texts[i]`` corresponds to the i-th input document. ``attachments`` only
    holds the binary payloads that were actually found, so it is not
    positionally aligned with ``texts`` once any document lacks one.

    Attributes:
        texts: Texts to embed, in input order.
        attachments: Binary payloads (e.g. images) found for the inputs.
    """

    model_config = ConfigDict(frozen=True)

    texts: list[str] = Field(default_factory=list, description="Texts to embed")
    attachments: list[bytes] = Field(
        default_factory=list,
        description="Binary payloads, filtered (not aligned with texts)",
    )

    @classmethod
    def from_text(cls, text: str) -> "EmbeddingRequest":
        """Create a single-text request."""
        return cls(texts=[text])
