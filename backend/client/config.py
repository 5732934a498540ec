"""
Client configuration using Pydantic Settings.

The API base URL is the only environment input the session store needs.
"""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Session client settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ECOCHALLENGE_",
        case_sensitive=False,
        extra="ignore",
    )

    api_base_url: str = "http://localhost:8000"
    request_timeout: float = 10.0  # seconds
    session_file: Path = Path.home() / ".ecochallenge" / "session.json"


def get_client_settings() -> ClientSettings:
    """Load client settings from the environment."""
    return ClientSettings()
