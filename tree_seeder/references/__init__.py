"""Reference rules, field paths and resolution."""

from .field_path import FieldPath, ListAppendPath, ScalarPath, parse_field_path
from .resolver import assign_reference, resolve_references
from .rules import EMPTY_RULES, ReferenceField, ReferenceRule, ReferenceRules

__all__ = [
    "EMPTY_RULES",
    "FieldPath",
    "ListAppendPath",
    "ReferenceField",
    "ReferenceRule",
    "ReferenceRules",
    "ScalarPath",
    "assign_reference",
    "parse_field_path",
    "resolve_references",
]
