"""Application configuration using pydantic-settings."""

import json
from ast import literal_eval
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Aquarium Analyser"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api"
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:5000",
    ]

    # LLM Configuration
    openai_api_key: str | None = None
    vision_model: str = "openai:gpt-4o"
    rewrite_model: str = "openai:gpt-4o"
    seo_rewrite_enabled: bool = True
    llm_max_retries: int = 2
    llm_timeout_seconds: float = 120.0
    vision_max_tokens: int = 1000

    # Article scraping
    article_source_origin: str = "https://www.2hraquarist.com"
    article_content_selector: str = ".article__content"
    http_timeout_seconds: float = 30.0
    scraper_user_agent: str = (
        "Mozilla/5.0 (compatible; AquariumAnalyser/1.0; +https://aquariumanalyser.com)"
    )

    # Static files
    public_dir: Path = Path("public")
    images_url_prefix: str = "/images"

    # Uploads
    upload_max_bytes: int = 10 * 1024 * 1024
    upload_allowed_mime_types: Annotated[list[str], NoDecode] = [
        "image/jpeg",
        "image/png",
        "image/jpg",
    ]

    @property
    def images_dir(self) -> Path:
        """Directory that backs the static image mount."""
        return self.public_dir / self.images_url_prefix.strip("/")

    @field_validator("cors_origins", "upload_allowed_mime_types", mode="before")
    @classmethod
    def _parse_string_list(cls, value: object) -> object:
        """Accept JSON list/string or comma-separated values."""
        def normalize(item: object) -> str:
            cleaned = str(item).strip().strip("'\"")
            if cleaned.startswith("[") and cleaned.endswith("]"):
                cleaned = cleaned[1:-1].strip().strip("'\"")
            return cleaned

        if isinstance(value, list):
            return [normalize(item) for item in value if normalize(item)]
        if not isinstance(value, str):
            return value

        raw = value.strip()
        if not raw:
            return []

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            try:
                parsed = literal_eval(raw)
            except (ValueError, SyntaxError):
                parsed = [normalize(item) for item in raw.split(",")]
                return [item for item in parsed if item]

        if isinstance(parsed, str):
            parsed = [parsed]
        if isinstance(parsed, tuple | set):
            parsed = list(parsed)
        if not isinstance(parsed, list):
            raise ValueError(
                "Expected a JSON array, JSON string, or comma-separated string.",
            )
        return [normalize(item) for item in parsed if normalize(item)]

    @field_validator("article_source_origin", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().rstrip("/")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
