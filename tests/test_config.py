"""Tests for library configuration."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from semantic_ingest.config import (
    EmbeddingSettings,
    Environment,
    QdrantSettings,
    SearchDefaults,
    Settings,
    get_settings,
)


class TestEmbeddingSettings:
    """Tests for embedding configuration."""

    def test_default_values(self) -> None:
        """Default values for embedding service."""
        settings = EmbeddingSettings()
        assert settings.base_url == "http://localhost:8080"
        assert settings.model == "BAAI/bge-large-en-v1.5"
        assert settings.dimensions is None
        assert settings.batch_size == 32
        assert settings.timeout == 60.0

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(os.environ, {"EMBEDDING_BATCH_SIZE": "64"}):
            settings = EmbeddingSettings()
            assert settings.batch_size == 64

    def test_settings_are_frozen(self) -> None:
        """Per-call settings cannot be mutated after construction."""
        settings = EmbeddingSettings()
        with pytest.raises(PydanticValidationError):
            settings.model = "other"  # type: ignore[misc]


class TestQdrantSettings:
    """Tests for Qdrant configuration."""

    def test_default_values(self) -> None:
        """Default values for Qdrant."""
        settings = QdrantSettings()
        assert settings.url == "http://localhost:6333"
        assert settings.api_key is None
        assert settings.collection_name == "documents"

    def test_api_key_is_secret_when_set(self) -> None:
        """API key should be masked when set."""
        with patch.dict(os.environ, {"QDRANT_API_KEY": "secret-key"}):
            settings = QdrantSettings()
            assert settings.api_key is not None
            assert "secret-key" not in str(settings.api_key)
            assert settings.api_key.get_secret_value() == "secret-key"


class TestSearchDefaults:
    """Tests for search defaults."""

    def test_default_values(self) -> None:
        """Default search limits."""
        settings = SearchDefaults()
        assert settings.top_k == 4
        assert settings.fetch_k == 20
        assert settings.lambda_mult == 0.5

    def test_env_override(self) -> None:
        """Environment variables override defaults."""
        with patch.dict(os.environ, {"SEARCH_TOP_K": "10"}):
            assert SearchDefaults().top_k == 10


class TestSettings:
    """Tests for main settings."""

    def test_default_environment(self) -> None:
        """Default environment is development."""
        settings = Settings()
        assert settings.environment == Environment.DEVELOPMENT
        assert settings.log_level == "INFO"

    def test_nested_settings_loaded(self) -> None:
        """Nested settings are initialized."""
        settings = Settings()
        assert isinstance(settings.embedding, EmbeddingSettings)
        assert isinstance(settings.qdrant, QdrantSettings)
        assert isinstance(settings.search, SearchDefaults)

    def test_environment_enum(self) -> None:
        """Environment can be set via string."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}):
            settings = Settings()
            assert settings.environment == Environment.PRODUCTION


class TestGetSettings:
    """Tests for settings singleton."""

    def test_returns_settings_instance(self) -> None:
        """get_settings returns a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_caching(self) -> None:
        """Settings are cached."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
