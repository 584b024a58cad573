"""Schema layer for server payloads and workflow documents."""

from .errors import DocumentError, DocumentLoadError, DocumentValidationError
from .models import (
    StatusDefinition,
    StatusRef,
    TransitionView,
    WorkflowDocument,
    WorkflowEdgeView,
    WorkflowStatusView,
    WorkflowView,
)
from .loader import load_document, load_yaml, parse_document_from_string

__all__ = [
    "DocumentError",
    "DocumentLoadError",
    "DocumentValidationError",
    "StatusDefinition",
    "StatusRef",
    "TransitionView",
    "WorkflowDocument",
    "WorkflowEdgeView",
    "WorkflowStatusView",
    "WorkflowView",
    "load_document",
    "load_yaml",
    "parse_document_from_string",
]
