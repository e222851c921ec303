"""Configuration management for the shortlinks service."""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Storage settings
    data_file: str = Field(
        default="data/links.json",
        description="Path of the JSON file holding all links"
    )

    reset_on_corrupt: bool = Field(
        default=True,
        description="Treat an unparseable data file as empty and overwrite it (False = fail instead)"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=4000,
        description="Port to listen on"
    )

    # Short link settings
    base_url: str = Field(
        default="http://localhost:4000",
        description="Base URL for generating short URLs"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=8,
        ge=1,
        description="Length of generated hexadecimal short codes"
    )

    enable_custom_codes: bool = Field(
        default=True,
        description="Allow users to provide custom short codes"
    )

    max_code_length: int = Field(
        default=64,
        ge=1,
        description="Longest accepted custom short code"
    )

    max_generation_retries: int = Field(
        default=5,
        ge=1,
        description="Maximum attempts when a generated short code collides"
    )

    allowed_schemes: str = Field(
        default="http,https",
        description="Comma-separated URL schemes accepted for link targets"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @property
    def scheme_list(self) -> List[str]:
        """Allowed schemes as a list, e.g. ALLOWED_SCHEMES=http,https."""
        return [s.strip().lower() for s in self.allowed_schemes.split(",") if s.strip()]


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
