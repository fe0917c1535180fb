"""Logging infrastructure for tree-seeder.

Prefect-integrated loggers configured from YAML or built-in defaults.

Example:
    >>> from tree_seeder.logging import get_pipeline_logger
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Seeding started")

Note:
    Modules in this package never call logging.getLogger() directly.
    Always use get_pipeline_logger().
"""

from .logging_config import LoggingConfig, get_pipeline_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "get_pipeline_logger",
    "setup_logging",
]
