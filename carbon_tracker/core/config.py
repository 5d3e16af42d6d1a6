"""
Configuration loading.

Each environment has a TOML file under carbon_tracker/config/.
"""
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import toml

from carbon_tracker.utils.constants import ConfigFile

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

logger = logging.getLogger(__name__)

__all__ = ["Config", "ConfigFile", "get_config", "get_config_file_for_environment"]


class Config:
    """Parsed configuration file."""

    def __init__(self, data: dict[str, Any], source: Path | None = None):
        self.data = data
        self.source = source

    @property
    def auth(self) -> dict[str, Any]:
        auth = dict(self.data.get("auth", {}))
        # The secret can be injected without touching the checked-in files
        secret_override = os.environ.get("JWT_SECRET_KEY")
        if secret_override:
            auth["secret_key"] = secret_override
        return auth

    @property
    def strict_activity_lookup(self) -> bool:
        return bool(
            self.data.get("emission_calculation", {}).get(
                "strict_activity_lookup", False
            )
        )

    def __repr__(self):
        return f"<Config: {self.source}>"


@lru_cache
def get_config(config_file: str) -> Config:
    """
    Load a configuration file.

    Args:
        config_file: Configuration file name (e.g., "development.toml")

    Returns:
        Config wrapping the parsed TOML data
    """
    path = CONFIG_DIR / config_file
    logger.debug(f"Loading configuration from {path}")
    return Config(toml.load(path), source=path)


def get_config_file_for_environment() -> str:
    """
    Resolve the configuration file from the ENVIRONMENT variable.

    Returns:
        Config file name, defaults to development.toml
    """
    env = os.getenv("ENVIRONMENT", "development")
    return f"{env}.toml"
