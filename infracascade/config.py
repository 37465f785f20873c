"""
Configuration management using pydantic-settings.
All settings loaded from environment variables prefixed with INFRACASCADE_.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Bundled sample reference datasets (infracascade/data)
DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INFRACASCADE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Reference data
    data_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding the reference dataset JSON files (defaults to bundled data)",
    )

    # Engine Configuration
    cascade_max_depth: int = Field(
        default=3, ge=1, le=10, description="Max cascade propagation depth (hops)"
    )
    impact_noise_floor: float = Field(
        default=0.05, ge=0.0, le=1.0, description="Impact strength below which effects are dropped"
    )
    max_redundancy_candidates: int = Field(
        default=5, ge=0, description="Max alternative cables reported for a cable source"
    )

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    api_reload: bool = Field(default=False, description="Enable hot reload")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins (comma-separated)",
    )

    # Logging
    log_level: str = Field(default="info", description="Log level")
    log_format: str = Field(default="json", description="Log format (json|console)")

    # Development
    dev_mode: bool = Field(default=True, description="Development mode")

    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, v: str) -> List[str]:
        """Parse comma-separated CORS origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @property
    def resolved_data_dir(self) -> Path:
        """Reference data directory, falling back to the bundled datasets."""
        return self.data_dir or DEFAULT_DATA_DIR


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure singleton behavior.
    """
    return Settings()
