"""In-memory document store for testing.

Dict-based storage implementing the DocumentStore protocol.
Not for production use: all data is lost when the process exits.
"""

import copy
from typing import Any

from tree_seeder.logging import get_pipeline_logger
from tree_seeder.store._records import CollectionRegistry
from tree_seeder.store._types import RecordId

logger = get_pipeline_logger(__name__)


class MemoryDocumentStore(CollectionRegistry):
    """Dict-based document store for unit tests.

    Storage layout: collection name -> record identity -> record data.
    """

    def __init__(self) -> None:
        super().__init__()
        self._records: dict[str, dict[RecordId, dict[str, Any]]] = {}

    async def write_record(self, collection: str, identity: RecordId, data: dict[str, Any]) -> None:
        """Store a record snapshot, replacing any previous version."""
        self._records.setdefault(collection, {})[identity] = copy.deepcopy(data)

    async def remove_record(self, collection: str, identity: RecordId) -> None:
        """Remove a record. No-op when it is not stored."""
        if self._records.get(collection, {}).pop(identity, None) is None:
            logger.debug(f"Delete of missing record {identity} in '{collection}' ignored")

    async def load_records(self, collection: str) -> list[dict[str, Any]]:
        """Return copies of all stored records of a collection in insertion order."""
        return [copy.deepcopy(data) for data in self._records.get(collection, {}).values()]
