"""Configuration management for modelkit.

Provides configuration schema using Pydantic.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Root configuration for modelkit."""
    log_level: str = "WARNING"
    log_json: bool = False
    log_dir: Path | None = Field(
        default=None,
        description="Directory for rotating log files; file logging is off when unset",
    )
    schema_dir: Path | None = Field(
        default=None,
        description="Default directory searched by SchemaLoader",
    )

    @property
    def log_path(self) -> Path | None:
        """Get expanded log directory."""
        if self.log_dir is None:
            return None
        return self.log_dir.expanduser()

    class Config:
        env_prefix = "MODELKIT_"


def get_settings() -> Settings:
    """Get a configuration instance built from the current environment."""
    return Settings()
