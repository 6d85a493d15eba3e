"""Configuration settings using Pydantic BaseSettings."""

from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TASK_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Authentication
    api_key: str = Field(
        default="task-api-secret-key-2025",
        min_length=1,
        description="Shared secret expected in X-Api-Key or ?api-key=",
    )

    # Application Configuration
    app_host: str = Field(default="0.0.0.0", description="HTTP host")
    app_port: int = Field(default=3000, description="HTTP port")
    debug: bool = Field(default=False, description="Enable debug mode")
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path")

    # Store Configuration
    seed_demo_tasks: bool = Field(
        default=True, description="Start the store with two demo tasks"
    )
