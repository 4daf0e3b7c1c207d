"""Application configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No secrets are hardcoded.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class EmbeddingSettings(BaseSettings):
    """Sentence embedding model configuration."""

    model_config = SettingsConfigDict(env_prefix="EMBEDDING_")

    model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="Hugging Face hub model name",
    )
    dimensions: int = Field(
        default=384,
        description="Embedding vector size produced by the model",
    )
    device: str | None = Field(
        default=None,
        description="Torch device (auto-detected when unset)",
    )
    batch_size: int = Field(
        default=32,
        description="Batch size for bulk embedding",
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
        default="music_reviews",
        description="Collection holding indexed music reviews",
    )
    preferences_collection: str = Field(
        default="music_preferences",
        description="Collection reserved for user music preferences",
    )
    distance: str = Field(
        default="Cosine",
        description="Distance metric of the collections (Cosine, Dot, Euclid, Manhattan)",
    )


class SearchSettings(BaseSettings):
    """Review search configuration."""

    model_config = SettingsConfigDict(env_prefix="SEARCH_")

    limit: int = Field(
        default=10,
        ge=1,
        description="Number of nearest reviews returned per query",
    )
    review_base_url: str = Field(
        default="https://pitchfork.com",
        description="Origin used to qualify relative review URLs",
    )


class PreferencesSettings(BaseSettings):
    """Local preference storage configuration."""

    model_config = SettingsConfigDict(env_prefix="PREFERENCES_")

    storage_path: Path = Field(
        default=Path(".data/preferences.json"),
        description="JSON file holding saved music preferences",
    )


class Settings(BaseSettings):
    """Main application settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # API settings
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host",
    )
    api_port: int = Field(
        default=8000,
        description="API server port",
    )

    # Nested settings
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    qdrant: QdrantSettings = Field(default_factory=QdrantSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    preferences: PreferencesSettings = Field(default_factory=PreferencesSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
