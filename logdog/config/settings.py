"""
Configuration management for Logdog.
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

# Environment variable overriding the global log root
GLOBAL_ROOT_ENV = "LOGDOG_HOME"


class LoggingConfig(BaseModel):
    """Settings baked into the logger package written by install."""
    log_level: str = Field("INFO", description="Minimum level the generated logger emits")
    output_dir: str = Field("logdog/logs", description="Log directory relative to the project")
    max_files: int = Field(30, ge=1, description="Daily log files kept by the generated logger")
    date_format: str = Field("2006-01-02", description="Day layout used in log file names")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Normalize the level and reject anything the logger cannot emit."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


class UIConfig(BaseModel):
    """User interface configuration."""
    retention_days: int = Field(7, ge=1, le=365, description="Default age in days for clearing old logs")


class DirectoryConfig(BaseModel):
    """Directory configuration settings."""
    global_root: Optional[str] = Field(None, description="Per-user root holding logs of every project")
    config: str = Field(default=".config/logdog", description="Configuration directory")


class Config(BaseModel):
    """Main configuration class."""
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)

    def get_data_dir(self) -> Path:
        """Get the configuration directory path."""
        return Path.home() / self.directories.config

    def get_config_file(self) -> Path:
        """Get the config file path."""
        return self.get_data_dir() / "config.json"

    def get_global_root(self) -> Path:
        """Get the global log root, honouring LOGDOG_HOME."""
        env_root = os.environ.get(GLOBAL_ROOT_ENV)
        if env_root:
            return Path(env_root).expanduser()
        if self.directories.global_root:
            return Path(self.directories.global_root).expanduser()
        return Path.home() / "logdog"


class ConfigManager:
    """Loads configuration from disk, falling back to defaults."""

    def __init__(self, config_file: Optional[Path] = None):
        self._config: Optional[Config] = None
        self._config_file = config_file

    @property
    def config(self) -> Config:
        """Get the current configuration, loading if needed."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> Config:
        """Load configuration from file or create default."""
        config = Config()
        config_file = self._config_file or config.get_config_file()

        if not config_file.exists():
            logger.debug("No configuration file at %s, using defaults", config_file)
            return config

        try:
            with open(config_file, 'r') as f:
                data = json.load(f)
            config = Config(**data)
            logger.info("Loaded configuration from %s", config_file)
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.warning("Error loading config from %s: %s; using defaults", config_file, e)
            config = Config()

        return config


# Global config manager instance
config_manager = ConfigManager()
