"""Document store protocol.

Defines what the seeding core needs from a store: an entity descriptor that
creates identity-bearing records, and records that support path-addressed field
access, save and delete. Backends: MemoryDocumentStore (testing) and
LocalDocumentStore (filesystem, debugging).
"""

from typing import Any, Protocol, runtime_checkable

from tree_seeder.store._types import RecordId


@runtime_checkable
class Record(Protocol):
    """A single backing record of some entity type."""

    @property
    def identity(self) -> RecordId:
        """Identity generated at creation time, available before persistence."""
        ...

    @property
    def collection_name(self) -> str:
        """Name of the collection the record belongs to."""
        ...

    def get(self, path: str) -> Any:
        """Read the value at a dotted path, None when missing."""
        ...

    def set(self, path: str, value: Any) -> None:
        """Overwrite the value at a dotted path."""
        ...

    async def save(self) -> None:
        """Persist the record's current state."""
        ...

    async def delete(self) -> None:
        """Remove the record from the store."""
        ...

    def to_dict(self) -> dict[str, Any]:
        """Return a deep-copied plain-dict snapshot of the record."""
        ...


@runtime_checkable
class EntityDescriptor(Protocol):
    """Identifies an entity type: a collection name and a record factory.

    Entity types are compared by object identity.
    """

    @property
    def name(self) -> str:
        """Collection name."""
        ...

    def create(self) -> Record:
        """Create a new, unsaved record with a freshly generated identity."""
        ...


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for the bundled store backends."""

    def collection(self, name: str, defaults: dict[str, Any] | None = None) -> EntityDescriptor:
        """Return the entity descriptor for a collection, registering it on first use."""
        ...

    def collection_names(self) -> list[str]:
        """Names of all registered collections."""
        ...

    async def find(self, collection: str, where: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """Return stored records of a collection whose paths equal the given values."""
        ...

    async def get(self, collection: str, identity: RecordId) -> dict[str, Any] | None:
        """Return a stored record by identity, None when absent."""
        ...

    async def count(self, collection: str) -> int:
        """Number of stored records in a collection."""
        ...
