from __future__ import annotations

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # General
    project_id: Optional[str] = Field(default=None, description="Firebase / GCP project ID")
    log_level: str = Field("INFO")
    allowed_origins: str = Field("*", description="Comma separated CORS origins.")

    # Database
    database_url: str = Field("sqlite:///./apexora.db")
    db_pool_size: int = Field(5)
    db_max_overflow: int = Field(10)
    db_pool_timeout: int = Field(30)
    db_pool_recycle: int = Field(1800, description="Recycle connections every N seconds.")

    # OpenAI
    openai_api_key: Optional[str] = Field(default=None)
    openai_model: str = Field("gpt-4o")

    # LLM provider selection & OpenAI params
    llm_provider: str = Field("openai")
    openai_temperature: float = Field(0.3)
    openai_top_p: float = Field(1.0)
    openai_max_tokens: int = Field(1024)

    # Image generation
    image_provider: str = Field("openai")
    openai_image_model: str = Field("gpt-image-1")
    openai_image_size: str = Field("1536x1024")
    placeholder_image_url: str = Field("https://placehold.co/600x400.png")

    # Firebase
    firebase_credentials_json: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_APPLICATION_CREDENTIALS", "FIREBASE_CREDENTIALS_JSON"),
        description="Path to service-account JSON file or JSON string itself.",
    )

    # Resend (transactional email)
    resend_api_key: Optional[str] = Field(default=None)
    resend_base_url: str = Field("https://api.resend.com")
    contact_from_address: str = Field("Apexora Contact Form <onboarding@resend.dev>")
    support_inbox: str = Field("support@apexora.com")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
