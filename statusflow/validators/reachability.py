"""Status reachability validators."""

from ..graph.node_types import WorkflowGraph
from .base import ValidationResult


def reachable_node_ids(graph: WorkflowGraph, start_node_id: str) -> set[str]:
    """Node ids reachable from a start node by following transitions."""
    outgoing: dict[str, list[str]] = {}
    for edge in graph.edges.values():
        outgoing.setdefault(edge.source_node_id, []).append(edge.target_node_id)

    # BFS from the start node
    queue = [start_node_id]
    visited: set[str] = set()

    while queue:
        current = queue.pop(0)
        if current in visited or current not in graph.nodes:
            continue
        visited.add(current)

        for target in outgoing.get(current, []):
            if target not in visited:
                queue.append(target)

    return visited


def check_unreachable_statuses(graph: WorkflowGraph) -> ValidationResult:
    """Check for statuses that cannot be reached from the initial status.

    An item can never enter an unreachable status, which usually means a
    transition is missing.

    Args:
        graph: The workflow snapshot to check.

    Returns:
        ValidationResult with an error when there is no initial status and
        warnings for unreachable statuses.
    """
    result = ValidationResult()

    if not graph.nodes:
        return result

    initial = graph.initial_node
    if initial is None:
        result.add_error(
            code="NO_INITIAL_STATUS",
            message="Workflow has statuses but no initial status",
        )
        return result

    reachable = reachable_node_ids(graph, initial.node_id)

    for node_id, node in graph.nodes.items():
        if node_id not in reachable:
            result.add_warning(
                code="UNREACHABLE_STATUS",
                message=f"Status '{node.label}' cannot be reached from initial status '{initial.label}'",
                status=node.label,
                status_id=node.status_id,
            )

    return result
