"""Domain-specific types for the store layer."""

from typing import NewType
from uuid import uuid4

RecordId = NewType("RecordId", str)
"""Hex-encoded UUID4 identity of a record, generated when the record is created."""


def generate_record_id() -> RecordId:
    """Generate a fresh record identity."""
    return RecordId(uuid4().hex)


__all__ = ["RecordId", "generate_record_id"]
