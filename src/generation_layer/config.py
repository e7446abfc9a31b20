"""
Configuration settings for the AI Generation Layer.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "AI Generation Layer"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Provider ===
    LLM_PROVIDER: str = "gemini"  # gemini | openai (stub)
    GEMINI_API_KEY: str = ""
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    LLM_TIMEOUT: int = 60  # seconds

    # === LLM Generation Parameters ===
    LLM_TEMPERATURE: float = 0.4
    LLM_MAX_TOKENS: int = 8192

    # === Retry & Fallback ===
    # Preference order, most preferred first. Never re-ordered at runtime.
    FALLBACK_MODELS: list[str] = [
        "gemini-2.0-flash",
        "gemini-1.5-pro",
        "gemini-1.5-flash",
        "gemini-1.5-flash-8b",
    ]
    MAX_RETRIES_PER_MODEL: int = 2
    RETRY_BACKOFF_BASE: float = 2.0  # wait = base ** (attempt - 1)

    # === Prompts ===
    PROMPT_TEMPLATES_DIR: Optional[str] = None  # None = bundled templates

    # === Logging ===
    AI_ERROR_LOG_PATH: Optional[str] = None  # e.g. "logs/ai-errors.log"

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
