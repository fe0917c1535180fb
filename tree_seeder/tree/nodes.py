"""Template and materialized fixture-tree nodes."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from tree_seeder.exceptions import SeedingRequiredError
from tree_seeder.references.rules import ReferenceRules
from tree_seeder.store._types import RecordId
from tree_seeder.store.protocol import EntityDescriptor, Record

__all__ = ["MaterializedNode", "TemplateNode", "TreeNode", "count_nodes", "iter_nodes", "require_materialized"]


@dataclass(eq=False, slots=True)
class TemplateNode:
    """Unmaterialized composition unit: an entity type and its child templates.

    Creating a template performs no I/O. The only mutable part is the pending
    patch map, which patch() replaces wholesale.
    """

    entity: EntityDescriptor
    children: tuple["TemplateNode", ...]
    rules: ReferenceRules
    patches: dict[str, Any] = field(default_factory=dict)

    @property
    def collection_name(self) -> str:
        return self.entity.name


@dataclass(eq=False, slots=True)
class MaterializedNode:
    """Template shape plus a concrete backing record with a generated identity."""

    entity: EntityDescriptor
    record: Record
    children: tuple["MaterializedNode", ...]
    rules: ReferenceRules

    @property
    def collection_name(self) -> str:
        return self.record.collection_name

    @property
    def identity(self) -> RecordId:
        return self.record.identity


TreeNode = TemplateNode | MaterializedNode


def iter_nodes(root: TreeNode) -> Iterator[TreeNode]:
    """Yield every node of a tree in depth-first pre-order."""
    yield root
    for child in root.children:
        yield from iter_nodes(child)


def count_nodes(root: TreeNode) -> int:
    return sum(1 for _ in iter_nodes(root))


def require_materialized(tree: TreeNode, operation: str) -> MaterializedNode:
    """Return ``tree`` if it is materialized, raise SeedingRequiredError otherwise."""
    if not isinstance(tree, MaterializedNode):
        raise SeedingRequiredError(f"Cannot {operation} a template tree; call seed() on it first")
    return tree
