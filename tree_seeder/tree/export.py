"""Project a materialized tree into plain record snapshots for assertions."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from tree_seeder.tree.nodes import MaterializedNode, TreeNode, require_materialized

__all__ = ["DocumentTree", "documents"]


class DocumentTree(BaseModel):
    """Read-only snapshot of one materialized node and its children."""

    model_config = ConfigDict(frozen=True)

    record: dict[str, Any]
    identity: str
    collection_name: str
    children: tuple["DocumentTree", ...] = ()

    def flatten(self) -> list["DocumentTree"]:
        """All nodes of this subtree in depth-first pre-order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.flatten())
        return nodes

    def in_collection(self, collection_name: str) -> list["DocumentTree"]:
        """Nodes of this subtree belonging to ``collection_name``, in pre-order."""
        return [node for node in self.flatten() if node.collection_name == collection_name]


def _project(node: MaterializedNode) -> DocumentTree:
    return DocumentTree(
        record=node.record.to_dict(),
        identity=node.record.identity,
        collection_name=node.collection_name,
        children=tuple(_project(child) for child in node.children),
    )


def documents(tree: TreeNode) -> DocumentTree:
    """Export a seeded tree.

    Raises:
        SeedingRequiredError: If ``tree`` is a template that was never seeded.
    """
    return _project(require_materialized(tree, "export documents of"))
