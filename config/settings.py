"""
Configuration management for the WePadel Coach backend
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Gemini API
    gemini_api_key: Optional[str] = Field(default=None)
    gemini_model: str = Field(default="gemini-2.5-flash")
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")

    # Generation
    temperature: float = Field(default=0.7)
    max_output_tokens: int = Field(default=1200)
    response_mime_type: str = Field(default="text/plain")

    # Server
    api_host: str = Field(default="0.0.0.0")
    port: int = Field(default=10000)
    log_level: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


SERVICE_NAME = "wepadel-coach-backend"

# Only the most recent turns of a thread are forwarded upstream
MAX_THREAD_TURNS = 10

MAX_BODY_BYTES = 1024 * 1024
