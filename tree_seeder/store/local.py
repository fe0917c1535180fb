"""Local filesystem document store for debugging.

Layout:
    {base_path}/{collection}/{identity}.json   <- record data
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from tree_seeder.exceptions import StoreError
from tree_seeder.logging import get_pipeline_logger
from tree_seeder.store._records import CollectionRegistry
from tree_seeder.store._types import RecordId

logger = get_pipeline_logger(__name__)


class LocalDocumentStore(CollectionRegistry):
    """Filesystem-backed document store with one JSON file per record.

    Records are browsable on disk, which makes seeded fixture trees easy to
    inspect while a test is paused.
    """

    def __init__(self, base_path: Path | None = None) -> None:
        super().__init__()
        self._base_path = base_path or Path.cwd()

    @property
    def base_path(self) -> Path:
        """Root directory for all stored collections."""
        return self._base_path

    async def write_record(self, collection: str, identity: RecordId, data: dict[str, Any]) -> None:
        """Write a record as JSON, replacing any previous version."""
        await asyncio.to_thread(self._write_sync, collection, identity, data)

    async def remove_record(self, collection: str, identity: RecordId) -> None:
        """Remove a record file. No-op when it does not exist."""
        await asyncio.to_thread(self._remove_sync, collection, identity)

    async def load_records(self, collection: str) -> list[dict[str, Any]]:
        """Load every record of a collection, ordered by file name."""
        return await asyncio.to_thread(self._load_sync, collection)

    # --- Sync implementation (called via asyncio.to_thread) ---

    def _collection_path(self, collection: str) -> Path:
        if ".." in collection:
            raise ValueError(f"collection contains path traversal '..': {collection!r}")
        if "/" in collection or "\\" in collection:
            raise ValueError(f"collection contains a path separator: {collection!r}")
        return self._base_path / collection

    def _write_sync(self, collection: str, identity: RecordId, data: dict[str, Any]) -> None:
        collection_dir = self._collection_path(collection)
        collection_dir.mkdir(parents=True, exist_ok=True)
        record_path = collection_dir / f"{identity}.json"
        record_path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")

    def _remove_sync(self, collection: str, identity: RecordId) -> None:
        record_path = self._collection_path(collection) / f"{identity}.json"
        if not record_path.exists():
            logger.debug(f"Delete of missing record {identity} in '{collection}' ignored")
            return
        record_path.unlink()

    def _load_sync(self, collection: str) -> list[dict[str, Any]]:
        collection_dir = self._collection_path(collection)
        if not collection_dir.is_dir():
            return []
        records: list[dict[str, Any]] = []
        for record_path in sorted(collection_dir.glob("*.json")):
            try:
                records.append(json.loads(record_path.read_text(encoding="utf-8")))
            except json.JSONDecodeError as e:
                raise StoreError(f"Unreadable record file {record_path}: {e}") from e
        return records
