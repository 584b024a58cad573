"""Isolated status and transition shape validators."""

from collections import Counter

from ..graph.node_types import WorkflowGraph
from .base import ValidationResult


def check_isolated_statuses(graph: WorkflowGraph) -> ValidationResult:
    """Check for statuses with no transitions at all.

    A single-status workflow is not reported: it has nothing to connect to.

    Args:
        graph: The workflow snapshot to check.

    Returns:
        ValidationResult with warnings for isolated statuses.
    """
    result = ValidationResult()

    if len(graph.nodes) < 2:
        return result

    connected: set[str] = set()
    for edge in graph.edges.values():
        connected.add(edge.source_node_id)
        connected.add(edge.target_node_id)

    for node_id, node in graph.nodes.items():
        if node_id not in connected:
            result.add_warning(
                code="ISOLATED_STATUS",
                message=f"Status '{node.label}' has no transitions to or from other statuses",
                status=node.label,
                status_id=node.status_id,
            )

    return result


def check_transition_shapes(graph: WorkflowGraph) -> ValidationResult:
    """Report self-loops and parallel transitions.

    Both are permitted by the editor; they are reported for review only.
    """
    result = ValidationResult()

    pairs = Counter(
        (edge.source_node_id, edge.target_node_id) for edge in graph.edges.values()
    )

    for edge in graph.edges.values():
        if edge.is_self_loop:
            node = graph.nodes.get(edge.source_node_id)
            name = node.label if node else edge.source_node_id
            result.add_info(
                code="SELF_LOOP",
                message=f"Transition '{edge.label or edge.edge_id}' leaves and re-enters '{name}'",
                transition=edge.edge_id,
            )

    for (source_id, target_id), count in sorted(pairs.items()):
        if count > 1:
            source = graph.nodes.get(source_id)
            target = graph.nodes.get(target_id)
            result.add_info(
                code="PARALLEL_TRANSITION",
                message=(
                    f"{count} transitions connect "
                    f"'{source.label if source else source_id}' to "
                    f"'{target.label if target else target_id}'"
                ),
                count=count,
            )

    return result
