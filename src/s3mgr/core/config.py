"""Runtime settings for s3mgr, read from ``S3MGR_*`` environment variables.

These control the tool itself (logging, tracing, where the config file
lives). Credentials and chunk sizes live in the TOML file managed by
``s3mgr config``.
"""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"
    otel_enabled: bool = False
    otel_service_name: str = "s3mgr"
    config_dir: Path = Path.home() / ".config" / "s3mgr"

    model_config = {
        "env_prefix": "S3MGR_",
        "case_sensitive": False,
    }

    @property
    def config_path(self) -> Path:
        """Location of the persisted TOML configuration."""
        return self.config_dir / "config.toml"


settings = Settings()
