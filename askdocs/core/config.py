"""Application configuration using Pydantic settings."""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openai_api_key: Optional[str] = None
    qdrant_url: str = "http://qdrant:6333"
    qdrant_api_key: Optional[str] = None
    qdrant_collection_name: str = "askdocs"
    qdrant_timeout: float = 30.0
    service_name: str = "askdocs"
    service_port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 384
    # One request per text unless enabled; order is preserved either way
    embedding_batch_requests: bool = False

    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 500

    max_chunk_size: int = 500
    min_chunk_size: int = 100

    upsert_batch_size: int = 100


settings = Settings()
