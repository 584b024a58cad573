"""Save payload for a reconciled workflow."""

from typing import Any

from ..graph.node_types import Node, WorkflowGraph
from .reconciler import ChangeSet


def build_save_payload(
    name: str,
    graph: WorkflowGraph,
    change_set: ChangeSet,
    workflow_id: int | None = None,
) -> dict[str, Any]:
    """Build the JSON-ready body a save call submits.

    The change-set is meant to be applied by the server as one transaction.

    Args:
        name: The workflow display name.
        graph: The current snapshot.
        change_set: The result of reconciling ``graph`` against its baseline.
        workflow_id: The workflow id, or None when creating a workflow.

    Returns:
        A dict with camelCase keys, ready for JSON encoding.

    Raises:
        DanglingReferenceError: If the change-set has unresolved endpoints.
    """
    change_set.raise_for_issues()

    initial = graph.initial_node
    payload: dict[str, Any] = {
        "name": name,
        "initialStatusId": initial.status_id if initial else None,
        "workflowStatuses": [_workflow_status(node) for node in graph.nodes.values()],
        "transitions": {
            "create": [
                {
                    "tempId": item.edge_id,
                    "name": item.name,
                    "fromStatusId": item.from_status_id,
                    "toStatusId": item.to_status_id,
                }
                for item in change_set.to_create
            ],
            "update": [
                {
                    "id": item.transition_id,
                    "name": item.name,
                    "fromStatusId": item.from_status_id,
                    "toStatusId": item.to_status_id,
                }
                for item in change_set.to_update
            ],
            "delete": [item.transition_id for item in change_set.to_delete],
        },
    }
    if workflow_id is not None:
        payload["id"] = workflow_id
    return payload


def _workflow_status(node: Node) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "statusId": node.status_id,
        "statusCategory": node.category,
        "isInitial": node.initial,
    }
    # Placements already stored on the server keep their id
    if node.workflow_status_id is not None:
        entry["id"] = node.workflow_status_id
    return entry
