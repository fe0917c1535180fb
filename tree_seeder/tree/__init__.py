"""Fixture-tree composition, materialization and export."""

from .builder import NodeBuilder, model, patch
from .export import DocumentTree, documents
from .materializer import materialize
from .nodes import MaterializedNode, TemplateNode, TreeNode, count_nodes, iter_nodes

__all__ = [
    "DocumentTree",
    "MaterializedNode",
    "NodeBuilder",
    "TemplateNode",
    "TreeNode",
    "count_nodes",
    "documents",
    "iter_nodes",
    "materialize",
    "model",
    "patch",
]
