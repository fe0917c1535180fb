"""Seed, persist and clean up fixture trees.

Persistence and cleanup fan out over the whole tree at once: each node's own
store operation runs concurrently with the calls for its child subtrees. The
first failure propagates to the caller; operations already in flight elsewhere
in the tree are not cancelled, so a failure can leave the tree partially
persisted or partially deleted.

Example:
    >>> tree = await seed(elder(mage(), mage()))
    >>> assert documents(tree).children[0].record["elderId"] == tree.identity
    >>> await cleanup(tree)
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from tree_seeder.logging import get_pipeline_logger
from tree_seeder.references.resolver import resolve_references
from tree_seeder.tree.materializer import materialize
from tree_seeder.tree.nodes import MaterializedNode, TemplateNode, TreeNode, count_nodes, require_materialized

__all__ = ["cleanup", "persist", "seed", "seeded"]

logger = get_pipeline_logger(__name__)


async def _save_all(node: MaterializedNode) -> None:
    await asyncio.gather(node.record.save(), *(_save_all(child) for child in node.children))


async def _delete_all(node: MaterializedNode) -> None:
    await asyncio.gather(node.record.delete(), *(_delete_all(child) for child in node.children))


async def persist(tree: TreeNode) -> None:
    """Save every record of a reference-resolved materialized tree."""
    await _save_all(require_materialized(tree, "persist"))


async def seed(template: TemplateNode) -> MaterializedNode:
    """Materialize ``template``, resolve its references and persist every record.

    The template itself is left untouched and can be seeded again; each run
    produces records with new identities.
    """
    if not isinstance(template, TemplateNode):
        raise TypeError(f"seed() expects a TemplateNode, got {type(template).__name__}")
    root = materialize(template)
    resolve_references(root)
    await persist(root)
    logger.info(f"Seeded {count_nodes(root)} records rooted at {root.collection_name} {root.identity}")
    return root


async def cleanup(tree: TreeNode) -> None:
    """Delete every record of a seeded tree."""
    root = require_materialized(tree, "clean up")
    await _delete_all(root)
    logger.info(f"Cleaned up {count_nodes(root)} records rooted at {root.collection_name} {root.identity}")


@asynccontextmanager
async def seeded(template: TemplateNode) -> AsyncIterator[MaterializedNode]:
    """Seed ``template`` for the duration of the block, then clean it up.

    Cleanup runs even when the block raises. A failed seed is not cleaned up.
    """
    root = await seed(template)
    try:
        yield root
    finally:
        await cleanup(root)
