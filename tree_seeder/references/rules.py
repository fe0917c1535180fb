"""Reference rule table.

A rule declares which fields on an owner entity's records hold identities of
other entity types. The table is immutable and shared by reference across a
whole fixture tree. Entity types are matched by object identity.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from tree_seeder.references.field_path import FieldPath, parse_field_path
from tree_seeder.store.protocol import EntityDescriptor

__all__ = ["EMPTY_RULES", "ReferenceField", "ReferenceRule", "ReferenceRules"]


@dataclass(frozen=True, slots=True)
class ReferenceField:
    """One (field path, target type) pair of a rule."""

    path: FieldPath
    target: EntityDescriptor


@dataclass(frozen=True, slots=True)
class ReferenceRule:
    """All reference fields declared by one owner entity type."""

    owner: EntityDescriptor
    fields: tuple[ReferenceField, ...]


class ReferenceRules:
    """Immutable table of reference rules, indexed by owner and by target.

    Example:
        >>> rules = ReferenceRules.declare({
        ...     elders: [("mages[]", mages), ("wand.wandId", wands)],
        ...     mages: [("elderId", elders), ("wands[].wandId", wands)],
        ... })
    """

    __slots__ = ("_rules", "_by_owner", "_by_target")

    def __init__(self, rules: Iterable[ReferenceRule] = ()) -> None:
        self._rules: tuple[ReferenceRule, ...] = tuple(rules)
        by_owner: dict[int, list[ReferenceField]] = {}
        by_target: dict[int, list[tuple[EntityDescriptor, ReferenceField]]] = {}
        for rule in self._rules:
            by_owner.setdefault(id(rule.owner), []).extend(rule.fields)
            for field in rule.fields:
                by_target.setdefault(id(field.target), []).append((rule.owner, field))
        # Keyed by id(); the descriptors themselves are kept alive by self._rules
        self._by_owner: dict[int, tuple[ReferenceField, ...]] = {key: tuple(value) for key, value in by_owner.items()}
        self._by_target: dict[int, tuple[tuple[EntityDescriptor, ReferenceField], ...]] = {
            key: tuple(value) for key, value in by_target.items()
        }

    @classmethod
    def declare(
        cls,
        declarations: Mapping[EntityDescriptor, Iterable[tuple[str | FieldPath, EntityDescriptor]]],
    ) -> "ReferenceRules":
        """Build a table from ``{owner: [(path, target), ...]}``, parsing every path once."""
        return cls(
            ReferenceRule(
                owner=owner,
                fields=tuple(ReferenceField(path=parse_field_path(path), target=target) for path, target in fields),
            )
            for owner, fields in declarations.items()
        )

    def fields_of(self, owner: EntityDescriptor) -> tuple[ReferenceField, ...]:
        """Reference fields declared by ``owner``, in declaration order."""
        return self._by_owner.get(id(owner), ())

    def referencing(self, target: EntityDescriptor) -> tuple[tuple[EntityDescriptor, ReferenceField], ...]:
        """(owner, field) pairs of every rule entry whose target is ``target``."""
        return self._by_target.get(id(target), ())

    def involves(self, entity: EntityDescriptor) -> bool:
        """Whether ``entity`` appears in the table as owner or target."""
        return id(entity) in self._by_owner or id(entity) in self._by_target

    def __iter__(self) -> Iterator[ReferenceRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"ReferenceRules({len(self._rules)} rules)"


EMPTY_RULES = ReferenceRules()
"""Shared table for entities that take part in no references."""
