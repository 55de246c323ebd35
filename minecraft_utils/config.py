"""Configuration loading and validation."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from minecraft_utils import __version__


class ApiConfig(BaseModel):
    """Mojang API endpoints and request settings."""

    session_server: str = "https://sessionserver.mojang.com"
    api_server: str = "https://api.mojang.com"
    timeout: int = 10  # Seconds per request
    user_agent: str = f"minecraft_utils/{__version__}"

    def session_url(self, path: str) -> str:
        return f"{self.session_server.rstrip('/')}/{path.lstrip('/')}"

    def api_url(self, path: str) -> str:
        return f"{self.api_server.rstrip('/')}/{path.lstrip('/')}"


class Config(BaseModel):
    """Top level configuration."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    blocklist_file: Optional[str] = None  # Local hash list used instead of fetching


def load_config(path: Path) -> Config:
    """Load configuration from a YAML file, or defaults if it does not exist."""
    if not path.exists():
        return Config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    api_data = data.get("api") or {}
    return Config(
        api=ApiConfig(**api_data),
        blocklist_file=data.get("blocklist_file"),
    )
