"""Field paths addressing reference fields on a record.

Two forms exist:

- ScalarPath: ``"wand.wandId"``. Assignment overwrites the field.
- ListAppendPath: declared with a ``[]`` marker, ``"mages[]"`` or
  ``"wands[].wandId"``. Assignment appends a new element to the first list
  found along the path (outer to inner) and continues the remaining segments
  inside that element.

Paths are parsed once, when reference rules are declared.
"""

from dataclasses import dataclass

from tree_seeder.exceptions import FieldPathError

__all__ = ["LIST_MARKER", "FieldPath", "ListAppendPath", "ScalarPath", "parse_field_path"]

LIST_MARKER = "[]"


@dataclass(frozen=True, slots=True)
class ScalarPath:
    """Single-value reference field, overwritten on assignment."""

    segments: tuple[str, ...]

    @property
    def dotted(self) -> str:
        return ".".join(self.segments)

    def __str__(self) -> str:
        return self.dotted


@dataclass(frozen=True, slots=True)
class ListAppendPath:
    """Multi-value reference field, accumulated in composition order."""

    segments: tuple[str, ...]

    @property
    def dotted(self) -> str:
        return ".".join(self.segments)

    def prefixes(self) -> list[tuple[str, str]]:
        """Proper (prefix, remainder) splits of the path, outermost first."""
        return [(".".join(self.segments[:depth]), ".".join(self.segments[depth:])) for depth in range(1, len(self.segments))]

    def __str__(self) -> str:
        return f"{self.dotted}{LIST_MARKER}"


FieldPath = ScalarPath | ListAppendPath


def parse_field_path(path: str | FieldPath) -> FieldPath:
    """Parse a field path declaration.

    A plain dotted string is a ScalarPath. A ``[]`` marker after any segment
    makes it a ListAppendPath; the marker is stripped from the segments.
    FieldPath instances pass through unchanged.

    Raises:
        FieldPathError: On empty paths, empty segments or stray brackets.
    """
    if isinstance(path, (ScalarPath, ListAppendPath)):
        return path
    if not isinstance(path, str) or not path:
        raise FieldPathError(f"Field path must be a non-empty string, got {path!r}")

    is_list = False
    segments: list[str] = []
    for raw in path.split("."):
        segment = raw
        if segment.endswith(LIST_MARKER):
            is_list = True
            segment = segment[: -len(LIST_MARKER)]
        if not segment:
            raise FieldPathError(f"Empty segment in field path {path!r}")
        if "[" in segment or "]" in segment:
            raise FieldPathError(f"Unexpected bracket in field path {path!r}")
        segments.append(segment)

    if is_list:
        return ListAppendPath(tuple(segments))
    return ScalarPath(tuple(segments))
