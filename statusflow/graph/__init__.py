"""Graph layer: the workflow graph model and its value types."""

from .errors import (
    DanglingReferenceError,
    DuplicateStatusError,
    InvalidCategoryError,
    NotFoundError,
    WorkflowGraphError,
)
from .node_types import Edge, Node, WorkflowGraph
from .workflow_graph import WorkflowGraphModel
from .builder import build_model, build_model_from_document

__all__ = [
    "DanglingReferenceError",
    "DuplicateStatusError",
    "InvalidCategoryError",
    "NotFoundError",
    "WorkflowGraphError",
    "Edge",
    "Node",
    "WorkflowGraph",
    "WorkflowGraphModel",
    "build_model",
    "build_model_from_document",
]
