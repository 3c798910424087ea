"""
Configuration utilities and settings management.

Handles environment variables, path resolution, and application settings.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    api_debug: bool = Field(default=True, alias="API_DEBUG")

    # NGINX Paths
    nginx_conf_dir: str = Field(
        default="/etc/nginx",
        alias="NGINX_CONF_DIR",
        description="Base directory that file parse requests are resolved against",
    )

    # Parser Settings
    parse_encoding: str = Field(
        default="utf-8", alias="PARSE_ENCODING", description="Text encoding used when reading config files"
    )
    max_config_bytes: int = Field(
        default=1_048_576,
        alias="MAX_CONFIG_BYTES",
        description="Largest config text accepted by the parse endpoints",
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in .env file


# Global settings instance
settings = Settings()


def get_nginx_conf_path() -> Path:
    """Get the NGINX configuration directory path."""
    return Path(settings.nginx_conf_dir)


def resolve_config_path(relative_path: str) -> Path | None:
    """
    Resolve a path below the configuration directory.

    Returns None if the result would escape the directory.
    """
    base = get_nginx_conf_path().resolve()
    candidate = (base / relative_path).resolve()
    if candidate != base and base not in candidate.parents:
        return None
    return candidate
