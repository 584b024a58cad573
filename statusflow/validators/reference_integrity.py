"""Reference integrity validator."""

from ..catalog.registry import CategoryRegistry
from ..catalog.statuses import StatusCatalog
from ..graph.node_types import WorkflowGraph
from .base import ValidationResult


def check_reference_integrity(
    graph: WorkflowGraph,
    registry: CategoryRegistry,
    catalog: StatusCatalog,
) -> ValidationResult:
    """Check that every reference in a workflow resolves.

    This validator checks:
    - Node categories are in the category registry
    - Node statuses are in the status catalog
    - Transition endpoints are nodes of the graph
    - Each status is placed at most once

    Args:
        graph: The workflow snapshot.
        registry: The session's category registry.
        catalog: The session's status catalog.

    Returns:
        ValidationResult with errors for broken references.
    """
    result = ValidationResult()

    seen_statuses: dict[int, str] = {}

    for node_id, node in graph.nodes.items():
        if node.category not in registry:
            result.add_error(
                code="UNKNOWN_CATEGORY",
                message=f"Status uses unregistered category '{node.category}'",
                status=node.label,
                category=node.category,
            )

        if node.status_id not in catalog:
            result.add_error(
                code="UNKNOWN_STATUS",
                message=f"Status {node.status_id} is not in the status catalog",
                status=node.label,
                status_id=node.status_id,
            )

        if node.status_id in seen_statuses:
            result.add_error(
                code="DUPLICATE_STATUS",
                message=f"Status {node.status_id} is placed more than once",
                status=node.label,
                status_id=node.status_id,
                nodes=[seen_statuses[node.status_id], node_id],
            )
        else:
            seen_statuses[node.status_id] = node_id

    for edge in graph.edges.values():
        for end, node_id in (("source", edge.source_node_id), ("target", edge.target_node_id)):
            if node_id not in graph.nodes:
                result.add_error(
                    code="DANGLING_TRANSITION",
                    message=f"Transition references missing {end} node '{node_id}'",
                    transition=edge.edge_id,
                    node_id=node_id,
                )

    return result
