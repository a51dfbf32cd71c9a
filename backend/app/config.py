"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "ReceiptWise"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/db.sqlite"

    # Identity (auth happens upstream; the caller's id arrives in a header)
    owner_header: str = "X-User-Id"
    default_owner: str = "local"

    # AI Provider
    ai_provider: str = "groq"  # groq, openrouter, ollama, openai, anthropic
    ai_model: str = "llama-3.1-8b-instant"
    ai_base_url: Optional[str] = None  # For Ollama: http://localhost:11434

    # API Keys (optional based on provider)
    groq_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
