"""Record and collection implementations shared by the bundled backends.

A StoredRecord keeps its working data in memory and hands a snapshot to its
backend on save(). Backends only implement the RecordSink write/remove/load
primitives; collection registration and querying live in CollectionRegistry.
"""

import copy
from typing import Any, Protocol

from tree_seeder.exceptions import StoreError
from tree_seeder.store._paths import get_path, set_path
from tree_seeder.store._types import RecordId, generate_record_id

__all__ = ["CollectionRegistry", "RecordSink", "StoreCollection", "StoredRecord"]

ID_FIELD = "_id"


class RecordSink(Protocol):
    """Backend primitives used by StoredRecord and CollectionRegistry."""

    async def write_record(self, collection: str, identity: RecordId, data: dict[str, Any]) -> None: ...

    async def remove_record(self, collection: str, identity: RecordId) -> None: ...

    async def load_records(self, collection: str) -> list[dict[str, Any]]: ...


class StoredRecord:
    """Working copy of a record bound to the backend that persists it."""

    def __init__(self, sink: RecordSink, collection_name: str, identity: RecordId, data: dict[str, Any]) -> None:
        self._sink = sink
        self._collection_name = collection_name
        self._identity = identity
        self._data = data

    @property
    def identity(self) -> RecordId:
        return self._identity

    @property
    def collection_name(self) -> str:
        return self._collection_name

    def get(self, path: str) -> Any:
        return get_path(self._data, path)

    def set(self, path: str, value: Any) -> None:
        set_path(self._data, path, value)

    async def save(self) -> None:
        # Snapshot before suspending so later in-memory edits are not persisted
        await self._sink.write_record(self._collection_name, self._identity, copy.deepcopy(self._data))

    async def delete(self) -> None:
        await self._sink.remove_record(self._collection_name, self._identity)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def __repr__(self) -> str:
        return f"StoredRecord(collection={self._collection_name!r}, identity={self._identity!r})"


class StoreCollection:
    """Entity descriptor for one collection of a bundled backend.

    Every created record starts from a deep copy of ``defaults`` with the
    generated identity stored under ``_id``.
    """

    def __init__(self, sink: RecordSink, name: str, defaults: dict[str, Any] | None = None) -> None:
        self._sink = sink
        self._name = name
        self._defaults: dict[str, Any] = copy.deepcopy(defaults) if defaults else {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def defaults(self) -> dict[str, Any]:
        return copy.deepcopy(self._defaults)

    def create(self) -> StoredRecord:
        identity = generate_record_id()
        data = copy.deepcopy(self._defaults)
        data[ID_FIELD] = identity
        return StoredRecord(self._sink, self._name, identity, data)

    def __repr__(self) -> str:
        return f"StoreCollection({self._name!r})"


class CollectionRegistry:
    """Collection registration and queries on top of RecordSink primitives."""

    def __init__(self) -> None:
        self._collections: dict[str, StoreCollection] = {}

    async def write_record(self, collection: str, identity: RecordId, data: dict[str, Any]) -> None:
        raise NotImplementedError

    async def remove_record(self, collection: str, identity: RecordId) -> None:
        raise NotImplementedError

    async def load_records(self, collection: str) -> list[dict[str, Any]]:
        raise NotImplementedError

    def collection(self, name: str, defaults: dict[str, Any] | None = None) -> StoreCollection:
        """Return the descriptor for ``name``, registering it on first use.

        Raises:
            StoreError: If the collection is already registered with different defaults.
        """
        existing = self._collections.get(name)
        if existing is not None:
            if defaults is not None and defaults != existing.defaults:
                raise StoreError(f"Collection '{name}' is already registered with different defaults")
            return existing
        created = StoreCollection(self, name, defaults)
        self._collections[name] = created
        return created

    def collection_names(self) -> list[str]:
        return list(self._collections)

    async def find(self, collection: str, where: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Return stored records whose dotted paths equal every value in ``where``."""
        records = await self.load_records(collection)
        if not where:
            return records
        return [data for data in records if all(get_path(data, path) == value for path, value in where.items())]

    async def get(self, collection: str, identity: RecordId) -> dict[str, Any] | None:
        matches = await self.find(collection, {ID_FIELD: identity})
        return matches[0] if matches else None

    async def count(self, collection: str) -> int:
        return len(await self.load_records(collection))
