"""Document store protocol and bundled backends for fixture trees."""

from ._types import RecordId
from .factory import create_document_store
from .local import LocalDocumentStore
from .memory import MemoryDocumentStore
from .protocol import DocumentStore, EntityDescriptor, Record

__all__ = [
    "DocumentStore",
    "EntityDescriptor",
    "LocalDocumentStore",
    "MemoryDocumentStore",
    "Record",
    "RecordId",
    "create_document_store",
]
