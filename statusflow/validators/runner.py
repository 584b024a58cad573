"""Run every structural check over a workflow."""

from pathlib import Path

from ..catalog.registry import CategoryRegistry
from ..catalog.statuses import StatusCatalog
from ..graph.builder import build_model_from_document
from ..graph.node_types import WorkflowGraph
from ..schema.loader import load_document
from .base import ValidationResult
from .orphan_detector import check_isolated_statuses, check_transition_shapes
from .reachability import check_unreachable_statuses
from .reference_integrity import check_reference_integrity


def run_validators(
    graph: WorkflowGraph,
    registry: CategoryRegistry,
    catalog: StatusCatalog,
) -> ValidationResult:
    """Validate a snapshot against the session's reference data.

    Reference problems are reported first, followed by reachability, isolated
    statuses and transition shapes.
    """
    return ValidationResult.combine(
        [
            check_reference_integrity(graph, registry, catalog),
            check_unreachable_statuses(graph),
            check_isolated_statuses(graph),
            check_transition_shapes(graph),
        ]
    )


def validate_document_file(path: str | Path) -> ValidationResult:
    """Load a workflow document, build its model and validate it.

    Raises:
        DocumentLoadError: If the file cannot be loaded.
        DocumentValidationError: If the document fails schema validation.
        InvalidCategoryError: If the document has statuses but no categories.
    """
    model = build_model_from_document(load_document(path))
    return run_validators(model.snapshot(), model.registry, model.catalog)
