"""
Configuration loading for openaiwire
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, PositiveFloat

from ._builder import RequestBuilder

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 120.0

# Environment variable for each configuration key
ENV_VARS = {
    "api_key": "OPENAI_API_KEY",
    "base_url": "OPENAI_BASE_URL",
    "organization": "OPENAI_ORGANIZATION",
    "timeout": "OPENAI_TIMEOUT",
}


def substitute_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment values."""
    if isinstance(value, dict):
        return {k: substitute_env(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substitute_env(item) for item in value]
    elif isinstance(value, str):
        return re.sub(r"\$\{([^}]+)\}", lambda m: os.environ.get(m.group(1), ""), value)
    return value


class Configuration(BaseModel):
    """Connection settings shared by every call made through one client."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    organization: Optional[str] = None
    timeout: PositiveFloat = DEFAULT_TIMEOUT

    @classmethod
    def builder(cls) -> "ConfigurationBuilder":
        return ConfigurationBuilder()

    @classmethod
    def from_env(cls, dotenv_path: Optional[Union[str, Path]] = None) -> "Configuration":
        """Load settings from the environment, reading a .env file first if present."""
        load_dotenv(dotenv_path)
        builder = cls.builder()
        for key, env_var in ENV_VARS.items():
            value = os.getenv(env_var)
            if value:
                getattr(builder, key)(value)
        return builder.build()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Configuration":
        """Load settings from a YAML mapping using the same keys as the model fields."""
        try:
            with open(path, 'r') as f:
                raw = yaml.safe_load(f) or {}
        except (FileNotFoundError, yaml.YAMLError) as e:
            raise RuntimeError(f"Failed to load openaiwire configuration from {path}: {e}")

        if not isinstance(raw, dict):
            raise RuntimeError(f"Failed to load openaiwire configuration from {path}: expected a mapping")

        values: Dict[str, Any] = substitute_env(raw)
        builder = cls.builder()
        for key in ENV_VARS:
            if values.get(key) not in (None, ""):
                getattr(builder, key)(values[key])
        return builder.build()


class ConfigurationBuilder(RequestBuilder):
    target = Configuration

    def api_key(self, api_key: str) -> "ConfigurationBuilder":
        return self._set("api_key", api_key)

    def base_url(self, base_url: str) -> "ConfigurationBuilder":
        return self._set("base_url", base_url)

    def organization(self, organization: str) -> "ConfigurationBuilder":
        return self._set("organization", organization)

    def timeout(self, seconds: float) -> "ConfigurationBuilder":
        return self._set("timeout", seconds)
