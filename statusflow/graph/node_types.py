"""Value types for the workflow graph."""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping

_DIGITS = re.compile(r"(\d+)")


def natural_key(value: str) -> list:
    """Sort key that orders ``e2`` before ``e10``."""
    return [int(part) if part.isdigit() else part for part in _DIGITS.split(value)]


@dataclass(frozen=True)
class Node:
    """A status placed in one workflow graph.

    ``workflow_status_id`` is the server id of the placement, None for
    statuses placed during the current session.
    """

    node_id: str
    status_id: int
    category: str
    label: str
    initial: bool = False
    workflow_status_id: int | None = None


@dataclass(frozen=True)
class Edge:
    """A directed transition between two nodes.

    ``persisted_transition_id`` is None for transitions created during the
    current session.
    """

    edge_id: str
    source_node_id: str
    target_node_id: str
    label: str = ""
    persisted_transition_id: int | None = None

    @property
    def is_new(self) -> bool:
        return self.persisted_transition_id is None

    @property
    def is_self_loop(self) -> bool:
        return self.source_node_id == self.target_node_id


@dataclass(frozen=True, eq=False)
class WorkflowGraph:
    """Immutable snapshot of a workflow graph."""

    nodes: Mapping[str, Node] = field(default_factory=dict)
    edges: Mapping[str, Edge] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))
        object.__setattr__(self, "edges", MappingProxyType(dict(self.edges)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkflowGraph):
            return NotImplemented
        return dict(self.nodes) == dict(other.nodes) and dict(self.edges) == dict(other.edges)

    @property
    def initial_node(self) -> Node | None:
        for node in self.nodes.values():
            if node.initial:
                return node
        return None

    def status_ids(self) -> set[int]:
        return {node.status_id for node in self.nodes.values()}

    def node_for_status(self, status_id: int) -> Node | None:
        for node in self.nodes.values():
            if node.status_id == status_id:
                return node
        return None

    def status_of(self, node_id: str) -> int | None:
        """Status id behind a node id, or None if the node is absent."""
        node = self.nodes.get(node_id)
        return node.status_id if node is not None else None

    def edges_touching(self, node_id: str) -> list[Edge]:
        return [
            edge
            for edge in self.edges.values()
            if edge.source_node_id == node_id or edge.target_node_id == node_id
        ]

    def ordered_edges(self) -> list[Edge]:
        """Edges in creation order of their ids."""
        return sorted(self.edges.values(), key=lambda edge: natural_key(edge.edge_id))

    def iter_transitions(self) -> Iterator[tuple[Node | None, Node | None, Edge]]:
        """Yield ``(source, target, edge)`` for every edge, in id order."""
        for edge in self.ordered_edges():
            yield self.nodes.get(edge.source_node_id), self.nodes.get(edge.target_node_id), edge
