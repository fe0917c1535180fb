"""Core configuration settings for tree-seeder.

Settings are loaded from environment variables with .env file support via
pydantic-settings.

Environment variables:
    LOCAL_STORE_PATH: Directory for the filesystem store. Empty selects the
        in-memory store.
    LOG_LEVEL: Default log level for tree_seeder loggers.

Example:
    >>> from tree_seeder.settings import settings
    >>> print(settings.local_store_path)

Note:
    Settings are loaded once at module import and frozen.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for store selection and logging.

    Attributes:
        local_store_path: Base directory for LocalDocumentStore. When empty,
            create_document_store() returns a MemoryDocumentStore.
        log_level: Level applied to tree_seeder loggers by default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Store
    local_store_path: str = ""

    # Logging
    log_level: str = "INFO"


settings = Settings()
"""Global settings instance, created at module import."""
