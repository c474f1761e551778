"""Library configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class EmbeddingSettings(BaseSettings):
    """Embedding model configuration.

    Also accepted per call by the embedding model, where it overrides
    the model's own settings for that call only.
    """

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_", frozen=True)

    base_url: str = Field(
        default="http://localhost:8080",
        description="Embedding service base URL",
    )
    model: str = Field(
        default="BAAI/bge-large-en-v1.5",
        description="Embedding model name",
    )
    dimensions: int | None = Field(
        default=None,
        description="Requested output dimensions (model default if unset)",
    )
    batch_size: int = Field(
        default=32,
        description="Maximum texts per HTTP request",
    )
    timeout: float = Field(
        default=60.0,
        description="Request timeout in seconds",
    )


class QdrantSettings(BaseSettings):
    """Qdrant vector database configuration."""

    model_config = SettingsConfigDict(env_prefix="QDRANT_")

    url: str = Field(
        default="http://localhost:6333",
        description="Qdrant server URL",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Qdrant API key (optional for local)",
    )
    collection_name: str = Field(
        default="documents",
        description="Default collection name",
    )


class SearchDefaults(BaseSettings):
    """Defaults applied to vector searches when the caller gives none."""

    model_config = SettingsConfigDict(env_prefix="SEARCH_")

    top_k: int = Field(
        default=4,
        description="Number of results to return",
    )
    fetch_k: int = Field(
        default=20,
        description="Candidates fetched before MMR re-ranking",
    )
    lambda_mult: float = Field(
        default=0.5,
        description="MMR relevance/diversity trade-off (1 = relevance only)",
    )


class Settings(BaseSettings):
    """Main library settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Nested settings
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)
    search: SearchDefaults = Field(default_factory=SearchDefaults)


@lru_cache
def get_settings() -> Settings:
    """Get cached library settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
