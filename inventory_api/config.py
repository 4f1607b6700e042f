"""
Service configuration.

Values come from environment variables (or a local ``.env`` file) with
defaults suitable for local development. pydantic handles type coercion.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8085, description="Server port")

    # Database
    mongodb_uri: Optional[str] = Field(
        default=None,
        description="MongoDB connection string; unset runs on the in-memory store",
    )
    mongodb_database: str = Field(default="inventory", description="Database when the URI names none")
    store_timeout: float = Field(default=5.0, gt=0, description="Seconds allowed per store call")

    # CORS
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
