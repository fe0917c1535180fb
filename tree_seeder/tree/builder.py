"""Composition builder: declare fixture trees as nested constructor calls.

Example:
    >>> elder = model(elders, rules)
    >>> mage = model(mages, rules)
    >>> template = elder(mage(), mage())
"""

from collections.abc import Mapping
from typing import Any

from tree_seeder.references.rules import EMPTY_RULES, ReferenceRules
from tree_seeder.store.protocol import EntityDescriptor
from tree_seeder.tree.nodes import TemplateNode

__all__ = ["NodeBuilder", "model", "patch"]


class NodeBuilder:
    """Node constructor for one entity type.

    Each call returns a new TemplateNode that shares this builder's entity
    descriptor and rule table.
    """

    __slots__ = ("entity", "rules")

    def __init__(self, entity: EntityDescriptor, rules: ReferenceRules) -> None:
        self.entity = entity
        self.rules = rules

    def __call__(self, *children: TemplateNode) -> TemplateNode:
        for child in children:
            if not isinstance(child, TemplateNode):
                raise TypeError(f"Children must be TemplateNode instances, got {type(child).__name__}")
        return TemplateNode(entity=self.entity, children=children, rules=self.rules)

    def __repr__(self) -> str:
        return f"NodeBuilder({self.entity.name!r})"


def model(entity: EntityDescriptor, rules: ReferenceRules | None = None) -> NodeBuilder:
    """Return a node constructor for ``entity``.

    Args:
        entity: Descriptor of the entity type, shared by every node built.
        rules: Reference rule table for the fixture tree. Entities that take
            part in no references can omit it.
    """
    return NodeBuilder(entity, rules if rules is not None else EMPTY_RULES)


def patch(node: TemplateNode, patches: Mapping[str, Any]) -> TemplateNode:
    """Set the literal field values applied to ``node``'s record when it is seeded.

    Each call replaces the node's previous patch map. Paths use the store's
    native addressing, so ``"beasts.0.name"`` is valid.

    Returns:
        The same node, to allow ``seed(patch(wizard(), {...}))``.
    """
    if not isinstance(node, TemplateNode):
        raise TypeError(f"patch() expects a TemplateNode, got {type(node).__name__}")
    node.patches = dict(patches)
    return node
