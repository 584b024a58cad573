"""Builder for converting a persisted WorkflowView into a WorkflowGraphModel."""

import logging

from ..catalog.registry import CategoryRegistry
from ..catalog.statuses import StatusCatalog
from ..schema.models import WorkflowDocument, WorkflowView
from .errors import InvalidCategoryError
from .workflow_graph import WorkflowGraphModel

logger = logging.getLogger(__name__)


def build_model(
    view: WorkflowView,
    registry: CategoryRegistry,
    catalog: StatusCatalog,
    allow_new_transitions: bool = False,
) -> WorkflowGraphModel:
    """Build a WorkflowGraphModel from a persisted workflow.

    Every transition keeps its server id, so the result is a valid baseline
    for reconciliation. A stored edge without a transition id cannot be
    matched on save and is skipped with a warning, unless
    ``allow_new_transitions`` is set, in which case it becomes a new
    transition.

    Args:
        view: The workflow as loaded from the server or a document.
        registry: The session's category registry.
        catalog: The session's status catalog.
        allow_new_transitions: Keep edges without a transition id as new
            transitions.

    Returns:
        A populated WorkflowGraphModel.

    Raises:
        InvalidCategoryError: If the workflow has statuses but the registry
            is empty.
    """
    model = WorkflowGraphModel(registry, catalog, name=view.name)

    initial_status_id = view.initial_status_id
    if initial_status_id is None:
        initial_status_id = next(
            (ws.status.id for ws in view.statuses if ws.initial), None
        )

    # Add all statuses first
    for workflow_status in view.statuses:
        status_id = workflow_status.status.id
        if model.node_for_status(status_id) is not None:
            logger.warning("Workflow %s lists status %s twice", view.id, status_id)
            continue

        model.place_loaded_status(
            status_id,
            _resolve_category(workflow_status.status_category, registry, view.id),
            _resolve_label(status_id, workflow_status.status.name, catalog),
            initial=status_id == initial_status_id,
            workflow_status_id=workflow_status.id,
        )

    # Add transitions (after all statuses exist)
    for edge_view in view.workflow_edges:
        source = model.node_for_status(edge_view.source_id)
        target = model.node_for_status(edge_view.target_id)
        if source is None or target is None:
            logger.warning(
                "Skipping transition %s: status %s -> %s is not placed in workflow %s",
                edge_view.transition_id,
                edge_view.source_id,
                edge_view.target_id,
                view.id,
            )
            continue

        if edge_view.transition_id is None and not allow_new_transitions:
            logger.warning(
                "Skipping edge %s: status %s -> %s has no transition id in workflow %s",
                edge_view.id,
                edge_view.source_id,
                edge_view.target_id,
                view.id,
            )
            continue

        label = edge_view.name
        if label is None:
            label = view.transition_name(edge_view.transition_id)
        model.restore_transition(source, target, label, edge_view.transition_id)

    return model


def build_model_from_document(document: WorkflowDocument) -> WorkflowGraphModel:
    """Build a model using the registry and catalog bundled in a document.

    Document edges without a transition id are new transitions.
    """
    registry = CategoryRegistry(document.categories)
    catalog = StatusCatalog(document.statuses)
    return build_model(
        document.workflow, registry, catalog, allow_new_transitions=True
    )


def _resolve_category(
    category: str | None, registry: CategoryRegistry, workflow_id: int | None
) -> str:
    if category is not None and category in registry:
        return category
    if registry.default is None:
        raise InvalidCategoryError(category)
    if category is not None:
        logger.warning(
            "Workflow %s uses unregistered category '%s', falling back to '%s'",
            workflow_id,
            category,
            registry.default,
        )
    return registry.default


def _resolve_label(status_id: int, server_name: str, catalog: StatusCatalog) -> str:
    name = catalog.name_of(status_id)
    if name is not None:
        return name
    if server_name:
        return server_name
    logger.warning("Status %s is not in the status catalog", status_id)
    return f"Unknown status {status_id}"
