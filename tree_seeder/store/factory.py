"""Factory function for creating document store instances based on settings."""

from pathlib import Path

from tree_seeder.settings import Settings
from tree_seeder.store.protocol import DocumentStore


def create_document_store(settings: Settings) -> DocumentStore:
    """Create a DocumentStore based on settings.

    Selects LocalDocumentStore when local_store_path is configured,
    otherwise falls back to MemoryDocumentStore.

    Backends are imported lazily to avoid circular imports.
    """
    if settings.local_store_path:
        from tree_seeder.store.local import LocalDocumentStore

        return LocalDocumentStore(Path(settings.local_store_path))

    from tree_seeder.store.memory import MemoryDocumentStore

    return MemoryDocumentStore()
