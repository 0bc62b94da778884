"""Configuration for the scoresheet API."""

from __future__ import annotations

import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Repository root: read-only assets (prompt and schema overrides) live here.
INSTALL_DIR = Path(__file__).resolve().parents[2]

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults for local runs."""

    model_config = SettingsConfigDict(
        env_file=INSTALL_DIR / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str | None = Field(default=None, alias="LOG_LEVEL")

    # GEMINI_API_KEY wins over GOOGLE_API_KEY when both are set
    extraction_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )
    extraction_model: str = Field(default="gemini-2.5-flash", alias="GEMINI_MODEL")
    extraction_base_url: str = Field(default=GEMINI_OPENAI_BASE_URL, alias="EXTRACTION_BASE_URL")
    rate_limit_cooldown_seconds: float = Field(default=42.0, alias="RATE_LIMIT_COOLDOWN_SECONDS")

    # Any value moves every writable path into the temp dir (serverless hosts)
    vercel: str | None = Field(default=None, alias="VERCEL")

    max_upload_bytes: int = Field(default=20 * 1024 * 1024, alias="MAX_UPLOAD_BYTES")
    max_body_bytes: int = Field(default=1024 * 1024, alias="MAX_BODY_BYTES")
    current_match_id: str = Field(default="current", alias="CURRENT_MATCH_ID")

    extraction_prompt_file: Path = Field(
        default=INSTALL_DIR / "extraction-prompt.txt", alias="EXTRACTION_PROMPT_FILE"
    )
    schema_file: Path = Field(default=INSTALL_DIR / "schema.json", alias="SCHEMA_FILE")

    @field_validator("extraction_api_key", mode="before")
    @classmethod
    def strip_quotes(cls, v: str | None) -> str | None:
        """Drop whitespace and one pair of surrounding quotes copied from a .env file."""
        if v is None:
            return None
        cleaned = str(v).strip()
        if cleaned[:1] in {'"', "'"}:
            cleaned = cleaned[1:]
        if cleaned[-1:] in {'"', "'"}:
            cleaned = cleaned[:-1]
        return cleaned or None

    @property
    def is_serverless(self) -> bool:
        return bool(self.vercel)

    @property
    def work_dir(self) -> Path:
        return Path(tempfile.gettempdir()) if self.is_serverless else INSTALL_DIR

    @property
    def records_dir(self) -> Path:
        return self.work_dir / "records"

    @property
    def upload_dir(self) -> Path:
        return self.work_dir / "uploads"

    @property
    def extraction_response_file(self) -> Path:
        return self.work_dir / "gemini-response.json"

    @property
    def allowed_cors_origins(self) -> list[str]:
        """Allow local dev ports for the scoresheet editor."""
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
