"""WorkflowGraphModel: the single owner and mutator of a workflow graph."""

import itertools
import logging
from typing import Any

import networkx as nx

from ..catalog.registry import CategoryRegistry
from ..catalog.statuses import StatusCatalog
from .errors import DuplicateStatusError, InvalidCategoryError, NotFoundError
from .node_types import Edge, Node, WorkflowGraph

logger = logging.getLogger(__name__)


class WorkflowGraphModel:
    """A workflow's statuses and transitions, with structural invariants.

    Wraps a networkx MultiDiGraph: nodes are keyed by session-local node ids,
    edges by session-local edge ids (used as the multigraph edge key), so
    parallel transitions and self-loops are represented natively.

    Every mutating method validates its arguments before touching the graph
    and then commits in one step. A rejected call raises a
    WorkflowGraphError subclass and leaves the graph unchanged.

    Exactly one node is marked initial whenever the graph has nodes.
    """

    def __init__(
        self,
        registry: CategoryRegistry,
        catalog: StatusCatalog,
        name: str = "",
    ):
        self._graph = nx.MultiDiGraph()
        self._registry = registry
        self._catalog = catalog
        self._node_seq = itertools.count(1)
        self._edge_seq = itertools.count(1)
        self._initial_node_id: str | None = None
        # edge id -> (source, target)
        self._edge_endpoints: dict[str, tuple[str, str]] = {}
        self.name = name

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph. Treat it as read-only."""
        return self._graph

    @property
    def registry(self) -> CategoryRegistry:
        return self._registry

    @property
    def catalog(self) -> StatusCatalog:
        return self._catalog

    @property
    def initial_node_id(self) -> str | None:
        return self._initial_node_id

    # -------------------------------------------------------------------------
    # Node operations
    # -------------------------------------------------------------------------

    def add_node(self, status_id: int, category: str | None = None) -> str:
        """Place a status from the catalog as a new node.

        Args:
            status_id: The status to place.
            category: The node's category. Defaults to the registry default.

        Returns:
            The new node id.

        Raises:
            DuplicateStatusError: If the status is already placed.
            NotFoundError: If the status is not in the catalog.
            InvalidCategoryError: If the category is not registered.
        """
        status = self._catalog.get(status_id)
        if status is None:
            raise NotFoundError("status", status_id)
        return self._place(status_id, category, status.name)

    def place_loaded_status(
        self,
        status_id: int,
        category: str | None,
        label: str,
        initial: bool = False,
        workflow_status_id: int | None = None,
    ) -> str:
        """Place a status that came from a persisted workflow.

        Unlike add_node the label is taken as given, so statuses the catalog
        no longer knows can still be shown. ``workflow_status_id`` is the
        server id of the placement.
        """
        node_id = self._place(status_id, category, label, workflow_status_id)
        if initial:
            self._initial_node_id = node_id
        return node_id

    def remove_node(self, node_id: str) -> list[str]:
        """Remove a node and every transition entering or leaving it.

        Returns:
            The ids of the transitions removed along with the node.

        Raises:
            NotFoundError: If the node does not exist.
        """
        self._require_node(node_id)

        removed_edges = sorted(
            {key for _, _, key in self._graph.out_edges(node_id, keys=True)}
            | {key for _, _, key in self._graph.in_edges(node_id, keys=True)}
        )
        # networkx drops incident edges together with the node
        self._graph.remove_node(node_id)
        for edge_id in removed_edges:
            del self._edge_endpoints[edge_id]

        if self._initial_node_id == node_id:
            self._initial_node_id = next(iter(self._graph.nodes), None)

        logger.debug(
            "Removed node %s with %d transition(s)", node_id, len(removed_edges)
        )
        return removed_edges

    def recategorize(self, node_id: str, category: str) -> None:
        """Change the category of a node.

        Raises:
            NotFoundError: If the node does not exist.
            InvalidCategoryError: If the category is not registered.
        """
        self._require_node(node_id)
        if category not in self._registry:
            raise InvalidCategoryError(category)
        self._graph.nodes[node_id]["category"] = category

    def set_initial(self, node_id: str) -> None:
        """Mark a node as the workflow's entry status.

        Raises:
            NotFoundError: If the node does not exist.
        """
        self._require_node(node_id)
        self._initial_node_id = node_id

    # -------------------------------------------------------------------------
    # Edge operations
    # -------------------------------------------------------------------------

    def connect(self, source_node_id: str, target_node_id: str) -> str:
        """Create a new, unnamed transition between two nodes.

        Self-loops are accepted and parallel transitions are never merged.

        Raises:
            NotFoundError: If either endpoint does not exist.
        """
        return self._add_edge(source_node_id, target_node_id, "", None)

    def restore_transition(
        self,
        source_node_id: str,
        target_node_id: str,
        label: str,
        transition_id: int | None,
    ) -> str:
        """Add a transition loaded from the server, keeping its id."""
        return self._add_edge(source_node_id, target_node_id, label, transition_id)

    def relabel_edge(self, edge_id: str, label: str) -> None:
        """Rename a transition.

        Raises:
            NotFoundError: If the edge does not exist.
        """
        source, target = self._require_edge(edge_id)
        self._graph.edges[source, target, edge_id]["label"] = label

    def disconnect(self, edge_id: str) -> None:
        """Delete a single transition.

        Raises:
            NotFoundError: If the edge does not exist.
        """
        source, target = self._require_edge(edge_id)
        self._graph.remove_edge(source, target, key=edge_id)
        del self._edge_endpoints[edge_id]
        logger.debug("Removed transition %s", edge_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_node(self, node_id: str) -> bool:
        return self._graph.has_node(node_id)

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edge_endpoints

    def get_node(self, node_id: str) -> Node:
        """Get a node by id.

        Raises:
            NotFoundError: If the node does not exist.
        """
        self._require_node(node_id)
        return self._node_value(node_id, self._graph.nodes[node_id])

    def get_edge(self, edge_id: str) -> Edge:
        """Get an edge by id.

        Raises:
            NotFoundError: If the edge does not exist.
        """
        source, target = self._require_edge(edge_id)
        return self._edge_value(source, target, edge_id, self._graph.edges[source, target, edge_id])

    def node_for_status(self, status_id: int) -> str | None:
        """Get the node id holding a status, if placed."""
        for node_id, data in self._graph.nodes(data=True):
            if data["status_id"] == status_id:
                return node_id
        return None

    def placed_status_ids(self) -> set[int]:
        return {data["status_id"] for _, data in self._graph.nodes(data=True)}

    def edges_touching(self, node_id: str) -> list[str]:
        """Ids of transitions entering or leaving a node."""
        self._require_node(node_id)
        keys = {key for _, _, key in self._graph.out_edges(node_id, keys=True)}
        keys |= {key for _, _, key in self._graph.in_edges(node_id, keys=True)}
        return sorted(keys)

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def snapshot(self) -> WorkflowGraph:
        """Return an immutable copy of the current graph."""
        nodes = {
            node_id: self._node_value(node_id, data)
            for node_id, data in self._graph.nodes(data=True)
        }
        edges = {
            key: self._edge_value(source, target, key, data)
            for source, target, key, data in self._graph.edges(keys=True, data=True)
        }
        return WorkflowGraph(nodes=nodes, edges=edges)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _place(
        self,
        status_id: int,
        category: str | None,
        label: str,
        workflow_status_id: int | None = None,
    ) -> str:
        existing = self.node_for_status(status_id)
        if existing is not None:
            raise DuplicateStatusError(status_id, existing)

        if category is None:
            category = self._registry.default
        if category is None or category not in self._registry:
            raise InvalidCategoryError(category)

        node_id = f"n{next(self._node_seq)}"
        self._graph.add_node(
            node_id,
            status_id=status_id,
            category=category,
            label=label,
            workflow_status_id=workflow_status_id,
        )
        if self._initial_node_id is None:
            self._initial_node_id = node_id

        logger.debug("Placed status %s as node %s (%s)", status_id, node_id, category)
        return node_id

    def _add_edge(
        self,
        source_node_id: str,
        target_node_id: str,
        label: str,
        transition_id: int | None,
    ) -> str:
        self._require_node(source_node_id)
        self._require_node(target_node_id)

        edge_id = f"e{next(self._edge_seq)}"
        self._graph.add_edge(
            source_node_id,
            target_node_id,
            key=edge_id,
            label=label,
            persisted_transition_id=transition_id,
        )
        self._edge_endpoints[edge_id] = (source_node_id, target_node_id)
        logger.debug("Connected %s -> %s as %s", source_node_id, target_node_id, edge_id)
        return edge_id

    def _require_node(self, node_id: str) -> None:
        if not self._graph.has_node(node_id):
            raise NotFoundError("node", node_id)

    def _require_edge(self, edge_id: str) -> tuple[str, str]:
        try:
            return self._edge_endpoints[edge_id]
        except KeyError:
            raise NotFoundError("transition", edge_id) from None

    def _node_value(self, node_id: str, data: dict[str, Any]) -> Node:
        return Node(
            node_id=node_id,
            status_id=data["status_id"],
            category=data["category"],
            label=data["label"],
            initial=node_id == self._initial_node_id,
            workflow_status_id=data.get("workflow_status_id"),
        )

    @staticmethod
    def _edge_value(source: str, target: str, key: str, data: dict[str, Any]) -> Edge:
        return Edge(
            edge_id=key,
            source_node_id=source,
            target_node_id=target,
            label=data.get("label", ""),
            persisted_transition_id=data.get("persisted_transition_id"),
        )
