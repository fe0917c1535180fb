"""Native dotted-path addressing over nested dict/list record data.

A path is a dot-separated list of segments. Numeric segments index lists,
everything else is a dict key: ``"beasts.0.name"`` addresses the ``name`` key
of the first element of the ``beasts`` list.
"""

from typing import Any

from tree_seeder.exceptions import StoreError

__all__ = ["get_path", "set_path", "split_path"]


def split_path(path: str) -> list[str]:
    """Split a dotted path, rejecting empty paths and empty segments."""
    segments = path.split(".")
    if not path or any(not segment for segment in segments):
        raise StoreError(f"Invalid field path: {path!r}")
    return segments


def _child(container: Any, segment: str) -> Any:
    if isinstance(container, dict):
        return container.get(segment)
    if isinstance(container, list) and segment.isdigit():
        index = int(segment)
        return container[index] if index < len(container) else None
    return None


def _put(container: dict[str, Any] | list[Any], segment: str, value: Any) -> None:
    if isinstance(container, list):
        if not segment.isdigit():
            raise StoreError(f"Cannot address a list with non-numeric segment {segment!r}")
        index = int(segment)
        # Pad so that index is addressable
        container.extend([None] * (index + 1 - len(container)))
        container[index] = value
    else:
        container[segment] = value


def get_path(data: dict[str, Any], path: str) -> Any:
    """Return the value at path, or None when any segment is missing."""
    current: Any = data
    for segment in split_path(path):
        current = _child(current, segment)
        if current is None:
            return None
    return current


def set_path(data: dict[str, Any], path: str, value: Any) -> None:
    """Set the value at path, creating intermediate containers as needed.

    A missing (or scalar) intermediate becomes a list when the following
    segment is numeric, otherwise a dict. Lists are padded with None up to the
    addressed index.
    """
    segments = split_path(path)
    current: Any = data
    for segment, following in zip(segments, segments[1:]):
        child = _child(current, segment)
        if not isinstance(child, (dict, list)):
            child = [] if following.isdigit() else {}
            _put(current, segment, child)
        current = child
    _put(current, segments[-1], value)
