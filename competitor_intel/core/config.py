"""
Configuration management for the Competitive Content Intelligence Engine.

This module handles all application settings using Pydantic Settings
for type validation and environment variable management.
"""

from typing import List, Union
from pydantic import AnyHttpUrl, validator
from pydantic_settings import BaseSettings


DEFAULT_TOPIC_VOCABULARY = [
    "marketing", "sales", "productivity", "leadership", "strategy",
    "innovation", "technology", "customer service", "growth", "branding",
]


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Project Information
    PROJECT_NAME: str = "Competitive Content Intelligence"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS and Security
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1"]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Database Configuration
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "competitor_intel"

    # Topic & format extraction
    TOPIC_VOCABULARY: List[str] = DEFAULT_TOPIC_VOCABULARY
    LONG_FORM_THRESHOLD: int = 500
    SHORT_FORM_THRESHOLD: int = 280

    @validator("TOPIC_VOCABULARY", pre=True)
    def assemble_topic_vocabulary(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip().lower() for i in v.split(",") if i.strip()]
        return v

    # Analysis execution
    MAX_CONTENT_ITEMS: int = 500  # per corpus, larger requests are rejected
    ANALYSIS_TIMEOUT_SECONDS: float = 5.0
    PARALLEL_COMPREHENSIVE: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
