"""
Application configuration loaded from environment variables.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── External compilation service (Gemini) ─────────────────────────────────
    GEMINI_API_KEY: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    GEMINI_MODEL: str = "gemini-2.5-pro"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    TEMPERATURE: float = 0.2
    # None leaves the timeout to the HTTP transport
    REQUEST_TIMEOUT: Optional[float] = None

    # ── App ───────────────────────────────────────────────────────────────────
    APP_NAME: str = "NL-to-SQL Compiler"
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
