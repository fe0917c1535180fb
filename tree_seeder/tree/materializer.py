"""Clone a template tree into a materialized tree with fresh records."""

import copy

from tree_seeder.references.rules import ReferenceRules
from tree_seeder.tree.nodes import MaterializedNode, TemplateNode

__all__ = ["materialize"]


def _clone(template: TemplateNode, rules: ReferenceRules) -> MaterializedNode:
    record = template.entity.create()
    children = tuple(_clone(child, rules) for child in template.children)
    for path, value in template.patches.items():
        # Copy so repeated seeds of one template never share mutable values
        record.set(path, copy.deepcopy(value))
    return MaterializedNode(entity=template.entity, record=record, children=children, rules=rules)


def materialize(template: TemplateNode, rules: ReferenceRules | None = None) -> MaterializedNode:
    """Create one record per template node, depth-first pre-order.

    The template is never mutated, so it can be materialized any number of
    times. Pending patches are applied to each new record before any reference
    is resolved. Every materialized node shares the root's rule table unless
    ``rules`` is given.
    """
    return _clone(template, rules if rules is not None else template.rules)
