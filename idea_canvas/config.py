"""
Configuration management using pydantic-settings and python-dotenv
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Server
    PORT: int = Field(
        default=3000,
        description="HTTP listen port",
        alias="PORT"
    )
    HOST: str = Field(
        default="0.0.0.0",
        description="HTTP bind address",
        alias="HOST"
    )
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Origins allowed to post the idea form",
        alias="CORS_ORIGINS"
    )

    # Google Sheets
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = Field(
        default=None,
        description="Path to the service account key file",
        alias="GOOGLE_APPLICATION_CREDENTIALS"
    )
    GOOGLE_SHEET_ID: Optional[str] = Field(
        default=None,
        description="Spreadsheet receiving the Ideas and LeanCanvas rows",
        alias="GOOGLE_SHEET_ID"
    )

    # LLM
    LLM_API_KEY: Optional[str] = Field(
        default=None,
        description="Bearer token for the chat completion API",
        alias="LLM_API_KEY"
    )
    LLM_MODEL: str = Field(
        default="claude-3-5-sonnet",
        description="Model identifier sent with every completion request",
        alias="LLM_MODEL"
    )
    LLM_API_BASE_URL: str = Field(
        default="https://api.perplexity.ai",
        description="Base URL of the OpenAI-compatible chat completion API",
        alias="LLM_API_BASE_URL"
    )

    # Application
    ENVIRONMENT: str = Field(
        default="development",
        description="Application environment"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "allow"  # Allow extra fields from environment variables


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
