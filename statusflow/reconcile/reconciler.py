"""Diff a workflow graph against its server baseline.

Only transitions are versioned server-side. A removed status shows up purely
as the deletion of the transitions that touched it.
"""

from dataclasses import dataclass, field

from ..catalog.statuses import StatusCatalog
from ..graph.errors import DanglingReferenceError
from ..graph.node_types import Edge, WorkflowGraph
from ..validators.base import ValidationResult


@dataclass(frozen=True)
class TransitionCreate:
    """A transition drawn during this session."""

    edge_id: str
    from_status_id: int | None
    to_status_id: int | None
    name: str


@dataclass(frozen=True)
class TransitionUpdate:
    """A persisted transition whose name or endpoints changed."""

    edge_id: str
    transition_id: int
    from_status_id: int | None
    to_status_id: int | None
    name: str
    changes: tuple[str, ...] = ()


@dataclass(frozen=True)
class TransitionDelete:
    """A persisted transition that is no longer in the graph."""

    transition_id: int
    from_status_id: int | None
    to_status_id: int | None
    name: str


@dataclass
class ChangeSet:
    """The create/update/delete partition of a workflow's transitions."""

    to_create: list[TransitionCreate] = field(default_factory=list)
    to_update: list[TransitionUpdate] = field(default_factory=list)
    to_delete: list[TransitionDelete] = field(default_factory=list)
    issues: ValidationResult = field(default_factory=ValidationResult)

    @property
    def is_empty(self) -> bool:
        return not (self.to_create or self.to_update or self.to_delete)

    @property
    def is_valid(self) -> bool:
        return self.issues.is_valid

    def raise_for_issues(self) -> None:
        """Raise for the first unresolved endpoint, if any.

        Raises:
            DanglingReferenceError: If any transition could not be resolved.
        """
        for issue in self.issues.errors:
            raise DanglingReferenceError(
                issue.transition or "", issue.details.get("status_id")
            )


def reconcile(
    baseline: WorkflowGraph,
    current: WorkflowGraph,
    catalog: StatusCatalog | None = None,
) -> ChangeSet:
    """Compute the transition change-set between two snapshots.

    Persisted transitions are matched by their server id and compared by
    name and endpoint status ids, so the two snapshots may come from
    separately built models. The function is pure: the same inputs always
    produce an equal ChangeSet.

    Args:
        baseline: The graph as last loaded from the server.
        current: The edited graph.
        catalog: If given, endpoint statuses must be present in it.

    Returns:
        The ChangeSet. Unresolvable endpoints are reported as
        DANGLING_REFERENCE errors in ``issues``; the affected transitions are
        still listed in their partition.
    """
    change_set = ChangeSet()

    baseline_edges: dict[int, Edge] = {}
    for edge in baseline.ordered_edges():
        if edge.persisted_transition_id is not None:
            baseline_edges.setdefault(edge.persisted_transition_id, edge)

    seen_transition_ids: set[int] = set()

    for edge in current.ordered_edges():
        from_status = current.status_of(edge.source_node_id)
        to_status = current.status_of(edge.target_node_id)

        if edge.persisted_transition_id is None:
            _check_endpoints(change_set, edge, from_status, to_status, catalog)
            change_set.to_create.append(
                TransitionCreate(
                    edge_id=edge.edge_id,
                    from_status_id=from_status,
                    to_status_id=to_status,
                    name=edge.label,
                )
            )
            continue

        seen_transition_ids.add(edge.persisted_transition_id)
        original = baseline_edges.get(edge.persisted_transition_id)

        if original is None:
            # Persisted on the server but unknown to this baseline: resubmit it whole.
            changes = ("name", "source", "target")
        else:
            changes = _changed_fields(
                original,
                baseline.status_of(original.source_node_id),
                baseline.status_of(original.target_node_id),
                edge,
                from_status,
                to_status,
            )

        if not changes:
            continue

        _check_endpoints(change_set, edge, from_status, to_status, catalog)
        change_set.to_update.append(
            TransitionUpdate(
                edge_id=edge.edge_id,
                transition_id=edge.persisted_transition_id,
                from_status_id=from_status,
                to_status_id=to_status,
                name=edge.label,
                changes=changes,
            )
        )

    for transition_id in sorted(baseline_edges):
        if transition_id in seen_transition_ids:
            continue
        original = baseline_edges[transition_id]
        change_set.to_delete.append(
            TransitionDelete(
                transition_id=transition_id,
                from_status_id=baseline.status_of(original.source_node_id),
                to_status_id=baseline.status_of(original.target_node_id),
                name=original.label,
            )
        )

    return change_set


def _changed_fields(
    original: Edge,
    original_from: int | None,
    original_to: int | None,
    edge: Edge,
    from_status: int | None,
    to_status: int | None,
) -> tuple[str, ...]:
    changes = []
    if original.label != edge.label:
        changes.append("name")
    if original_from != from_status:
        changes.append("source")
    if original_to != to_status:
        changes.append("target")
    return tuple(changes)


def _check_endpoints(
    change_set: ChangeSet,
    edge: Edge,
    from_status: int | None,
    to_status: int | None,
    catalog: StatusCatalog | None,
) -> None:
    for end, node_id, status_id in (
        ("source", edge.source_node_id, from_status),
        ("target", edge.target_node_id, to_status),
    ):
        if status_id is None:
            change_set.issues.add_error(
                code="DANGLING_REFERENCE",
                message=f"Transition {end} node '{node_id}' does not exist",
                transition=edge.edge_id,
                node_id=node_id,
            )
        elif catalog is not None and status_id not in catalog:
            change_set.issues.add_error(
                code="DANGLING_REFERENCE",
                message=f"Transition {end} status {status_id} is not a known status",
                transition=edge.edge_id,
                status_id=status_id,
            )
