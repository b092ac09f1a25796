"""Persistent storage of credentials and transfer defaults in TOML."""

import tomllib
from pathlib import Path
from typing import Optional

import tomli_w
from pydantic import ValidationError as PydanticValidationError

from s3mgr.core import get_logger, settings
from s3mgr.core.exceptions import ConfigError
from s3mgr.schemas import AppConfig

logger = get_logger(__name__)


class ConfigStore:
    """Loads, saves and resets ``config.toml``."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else settings.config_path

    def load(self) -> AppConfig:
        """Return the stored configuration, or defaults if nothing is stored."""
        if not self.path.exists():
            logger.debug("No config file, using defaults", path=str(self.path))
            return AppConfig()

        try:
            with self.path.open("rb") as f:
                data = tomllib.load(f)
            return AppConfig.model_validate(data)
        except OSError as e:
            raise ConfigError(f"Failed to read config file at {self.path}: {e}")
        except (tomllib.TOMLDecodeError, PydanticValidationError) as e:
            raise ConfigError(f"Failed to parse config file at {self.path}: {e}")

    def save(self, config: AppConfig) -> None:
        """Write ``config`` to disk, creating the config directory if needed."""
        data = config.model_dump(exclude_none=True)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("wb") as f:
                tomli_w.dump(data, f)
        except OSError as e:
            raise ConfigError(f"Failed to write config file at {self.path}: {e}")
        logger.info("Configuration saved", path=str(self.path))

    def reset(self) -> AppConfig:
        """Delete the stored file and write the defaults back."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise ConfigError(f"Failed to remove config file at {self.path}: {e}")

        config = AppConfig()
        self.save(config)
        return config
