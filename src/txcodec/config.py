"""
Configuration of the codec and its loaders.

The configuration is read from a YAML file and validated with Pydantic. The
file is located through the `TXCODEC_CONFIG` environment variable, falling
back to `txcodec.yaml` in the working directory. When neither exists the
defaults below apply.

Classes:
- Config: The configuration structure, with validation.
- EnvConfig: Loads the configuration file and exposes it.
"""

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ValidationError

CONFIG_ENV_VAR = "TXCODEC_CONFIG"
DEFAULT_CONFIG_PATH = Path("txcodec.yaml")

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Config(BaseModel):
    """
    Represents the overall configuration.

    Attributes:
    - log_level (str): Level applied to the `txcodec` loggers.
    - verify_json_hash (bool): Whether loading a JSON transaction that
      advertises a `hash` checks it against the computed transaction hash.

    """

    log_level: LogLevel = "WARNING"
    verify_json_hash: bool = True


def config_path() -> Path:
    """
    Path of the configuration file that `EnvConfig` reads.
    """
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))


class EnvConfig(Config):
    """
    Loads and validates the configuration from a YAML file.

    This is a wrapper class for the Config model. It reads a config file
    from disk into a Config model and then exposes it.
    """

    def __init__(self, path: Optional[Path] = None):
        """Init for the EnvConfig class."""
        if path is None:
            path = config_path()

        config_data = {}
        if path.exists():
            with path.open("r") as file:
                config_data = yaml.safe_load(file) or {}

        try:
            # Validate and parse with Pydantic
            super().__init__(**config_data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e
