"""Centralized logging configuration for tree-seeder.

Supports YAML-based configuration and programmatic setup with defaults.
Loggers are obtained through Prefect's get_logger so that seeding done inside
flows and tasks shows up in Prefect run logs.

Environment variables:
    TREE_SEEDER_LOGGING_CONFIG: Path to custom logging.yml
    TREE_SEEDER_LOG_LEVEL: Default log level (INFO, DEBUG, etc.)
    PREFECT_LOGGING_SETTINGS_PATH: Alternative config path
"""

import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

from tree_seeder.settings import settings

# Default log levels for different components
DEFAULT_LOG_LEVELS = {
    "tree_seeder": "INFO",
    "tree_seeder.references": "INFO",
    "tree_seeder.tree": "INFO",
    "tree_seeder.store": "INFO",
    "tree_seeder.seeding": "INFO",
}


class LoggingConfig:
    """Manages logging configuration for the package.

    Configuration precedence:
        1. Explicit config_path parameter
        2. TREE_SEEDER_LOGGING_CONFIG environment variable
        3. PREFECT_LOGGING_SETTINGS_PATH environment variable
        4. Default configuration

    Example:
        >>> config = LoggingConfig()
        >>> config.apply()
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config: Optional[Dict[str, Any]] = None

    @staticmethod
    def _get_default_config_path() -> Optional[Path]:
        """Get config path from environment variables, None when unset."""
        if env_path := os.environ.get("TREE_SEEDER_LOGGING_CONFIG"):
            return Path(env_path)

        if prefect_path := os.environ.get("PREFECT_LOGGING_SETTINGS_PATH"):
            return Path(prefect_path)

        return None

    def load_config(self) -> Dict[str, Any]:
        """Load logging configuration from file or defaults.

        Returns:
            Dictionary in logging.config.dictConfig format.

        Note:
            Configuration is cached after first load. Create a new
            LoggingConfig instance to reload from disk.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        assert self._config is not None
        return self._config

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Default configuration used when no config file is found.

        Default format:
            "HH:MM:SS.mmm | LEVEL | logger.name - message"
        """
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "tree_seeder": {
                    "level": os.environ.get("TREE_SEEDER_LOG_LEVEL", settings.log_level),
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
        }

    def apply(self):
        """Apply the configuration to Python's logging system.

        Also sets PREFECT_LOGGING_LEVEL when the configuration declares a
        "prefect" logger.
        """
        config = self.load_config()
        logging.config.dictConfig(config)

        if "prefect" in config.get("loggers", {}):
            prefect_level = config["loggers"]["prefect"].get("level", "INFO")
            os.environ.setdefault("PREFECT_LOGGING_LEVEL", prefect_level)


# Global configuration instance
_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None):
    """Setup logging for tree-seeder.

    Args:
        config_path: Optional path to YAML logging configuration file.
        level: Optional log level override applied to every tree_seeder logger.

    Example:
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for logger_name in DEFAULT_LOG_LEVELS:
            logger = get_logger(logger_name)
            logger.setLevel(level)

        os.environ["PREFECT_LOGGING_LEVEL"] = level


def get_pipeline_logger(name: str):
    """Get a Prefect-integrated logger, initializing logging on first use.

    Args:
        name: Logger name, typically __name__.
    """
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
