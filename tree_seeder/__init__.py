"""tree-seeder: hierarchical test fixtures for document stores.

Declare a tree of related entities, seed it into a store with every declared
cross-record reference wired up, assert against it, then clean it up.

Quick Start:
    >>> from tree_seeder import MemoryDocumentStore, ReferenceRules, model, seed, documents, cleanup
    >>>
    >>> store = MemoryDocumentStore()
    >>> elders = store.collection("elders", {"mages": []})
    >>> mages = store.collection("mages")
    >>> rules = ReferenceRules.declare({
    ...     elders: [("mages[]", mages)],
    ...     mages: [("elderId", elders)],
    ... })
    >>> elder, mage = model(elders, rules), model(mages, rules)
    >>>
    >>> tree = await seed(elder(mage(), mage()))
    >>> snapshot = documents(tree)
    >>> await cleanup(tree)

Environment Variables:
    - LOCAL_STORE_PATH: Use the filesystem store from create_document_store()
    - TREE_SEEDER_LOG_LEVEL: Log level for tree_seeder loggers
"""

from . import exceptions
from .exceptions import FieldPathError, SeedingRequiredError, StoreError, TreeSeederError
from .logging import LoggingConfig, get_pipeline_logger, setup_logging
from .references import (
    FieldPath,
    ListAppendPath,
    ReferenceRules,
    ScalarPath,
    parse_field_path,
    resolve_references,
)
from .seeding import cleanup, persist, seed, seeded
from .settings import settings
from .store import (
    DocumentStore,
    EntityDescriptor,
    LocalDocumentStore,
    MemoryDocumentStore,
    Record,
    RecordId,
    create_document_store,
)
from .tree import (
    DocumentTree,
    MaterializedNode,
    NodeBuilder,
    TemplateNode,
    documents,
    iter_nodes,
    materialize,
    model,
    patch,
)

__version__ = "0.1.0"

__all__ = [
    # Config/Settings
    "settings",
    # Logging
    "LoggingConfig",
    "get_pipeline_logger",
    "setup_logging",
    # Errors
    "exceptions",
    "FieldPathError",
    "SeedingRequiredError",
    "StoreError",
    "TreeSeederError",
    # Store
    "DocumentStore",
    "EntityDescriptor",
    "LocalDocumentStore",
    "MemoryDocumentStore",
    "Record",
    "RecordId",
    "create_document_store",
    # References
    "FieldPath",
    "ListAppendPath",
    "ReferenceRules",
    "ScalarPath",
    "parse_field_path",
    "resolve_references",
    # Tree
    "DocumentTree",
    "MaterializedNode",
    "NodeBuilder",
    "TemplateNode",
    "documents",
    "iter_nodes",
    "materialize",
    "model",
    "patch",
    # Seeding
    "cleanup",
    "persist",
    "seed",
    "seeded",
]
