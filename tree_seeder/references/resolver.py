"""Reference resolution over a materialized fixture tree.

For every parent/child pair the resolver assigns:

- downward references: the child's identity into the parent's record, for
  each field the parent's entity type declares with the child's type as target;
- upward references: the parent's identity into the child's record, for each
  field the child's entity type declares with the parent's type as target.

All pairs at one level are resolved before descending, so every pair is
handled exactly once, at the parent's level. Rule entries with no matching
child are skipped.
"""

from typing import TYPE_CHECKING

from tree_seeder.logging import get_pipeline_logger
from tree_seeder.references.field_path import FieldPath, ListAppendPath, ScalarPath
from tree_seeder.references.rules import ReferenceRules
from tree_seeder.store._types import RecordId
from tree_seeder.store.protocol import Record

if TYPE_CHECKING:
    from tree_seeder.tree.nodes import MaterializedNode

__all__ = ["assign_reference", "resolve_references"]

logger = get_pipeline_logger(__name__)


def _append_reference(record: Record, path: ListAppendPath, identity: RecordId) -> None:
    # First list along the path (outer to inner) is the insertion point
    for prefix, remainder in path.prefixes():
        current = record.get(prefix)
        if isinstance(current, list):
            record.set(f"{prefix}.{len(current)}.{remainder}", identity)
            return

    dotted = path.dotted
    current = record.get(dotted)
    if isinstance(current, list):
        record.set(f"{dotted}.{len(current)}", identity)
    elif current is None:
        record.set(dotted, [identity])
    else:
        record.set(dotted, identity)


def assign_reference(record: Record, path: FieldPath, identity: RecordId) -> None:
    """Write ``identity`` into ``record`` at ``path``.

    ScalarPath overwrites. ListAppendPath appends at the current length of the
    first list found along the path and creates a one-element list when the
    field is empty.
    """
    match path:
        case ScalarPath():
            record.set(path.dotted, identity)
        case ListAppendPath():
            _append_reference(record, path, identity)


def _resolve_level(parent: "MaterializedNode", rules: ReferenceRules) -> None:
    downward = rules.fields_of(parent.entity)
    upward = rules.referencing(parent.entity)

    for child in parent.children:
        matched = False
        for field in downward:
            if field.target is child.entity:
                assign_reference(parent.record, field.path, child.record.identity)
                logger.debug(f"{parent.collection_name}.{field.path} <- {child.collection_name} {child.record.identity}")
                matched = True
        for owner, field in upward:
            if owner is child.entity:
                assign_reference(child.record, field.path, parent.record.identity)
                logger.debug(f"{child.collection_name}.{field.path} <- {parent.collection_name} {parent.record.identity}")
                matched = True
        if not matched and (downward or upward):
            logger.debug(f"No reference rule joins {parent.collection_name} and child {child.collection_name}")

    for child in parent.children:
        _resolve_level(child, rules)


def resolve_references(root: "MaterializedNode", rules: ReferenceRules | None = None) -> None:
    """Assign every declared reference across parent/child pairs of ``root``.

    Args:
        root: Materialized tree; every node already has a record identity.
        rules: Rule table to apply. Defaults to the table shared by ``root``.
    """
    _resolve_level(root, rules if rules is not None else root.rules)
