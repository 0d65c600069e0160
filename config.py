"""Application configuration."""

from functools import lru_cache
from typing import Optional
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """App settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    environment: str = "development"
    debug: bool = True

    # Hugging Face Inference API
    huggingface_token: Optional[SecretStr] = None
    hf_api_base_url: str = "https://api-inference.huggingface.co/models"
    hf_model: str = "epfl-llm/medalpaca-7b"
    hf_timeout_seconds: float = 30.0

    # Retry
    max_retries: int = 3
    initial_delay_ms: int = 2000
    warmup_margin_ms: int = 5000

    # Generation
    max_new_tokens: int = 150
    temperature: float = 0.7
    repetition_penalty: float = 1.2


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
