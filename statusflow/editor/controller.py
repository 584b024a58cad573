"""GraphEditorController: turns operator gestures into model commands."""

import logging
from typing import Any, Callable, TypeVar

from ..graph.errors import NotFoundError, WorkflowGraphError
from ..graph.workflow_graph import WorkflowGraphModel
from ..schema.models import StatusDefinition
from .state import (
    ConfirmationKind,
    Notice,
    NoticeLevel,
    PendingConfirmation,
    ViewState,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GraphEditorController:
    """Mediates between the editor view and the WorkflowGraphModel.

    The view calls these methods and renders ``state`` plus the model's
    snapshot; it never mutates the model itself. Model errors are turned into
    notices and the rejected gesture becomes a no-op. Nothing is retried.
    """

    def __init__(self, model: WorkflowGraphModel):
        self._model = model
        self.state = ViewState()

    @property
    def model(self) -> WorkflowGraphModel:
        return self._model

    # -------------------------------------------------------------------------
    # Add-node gesture
    # -------------------------------------------------------------------------

    def available_statuses(self) -> list[StatusDefinition]:
        """Statuses that can still be placed, in catalog order."""
        return self._model.catalog.unplaced(self._model.placed_status_ids())

    @property
    def can_add_node(self) -> bool:
        """False when there is no category to default to or nothing to place."""
        if self._model.registry.is_empty():
            return False
        return bool(self.available_statuses())

    def choose_status(self, status_id: int) -> bool:
        """Pick the status to place; it must be one of available_statuses()."""
        if not self.can_add_node:
            self._notify_error("Adding statuses is unavailable")
            return False
        if status_id not in {s.id for s in self.available_statuses()}:
            self._notify_error(f"Status {status_id} cannot be added to this workflow")
            return False
        self.state.pending_status_id = status_id
        return True

    def cancel_add_node(self) -> None:
        self.state.pending_status_id = None

    def confirm_add_node(self) -> str | None:
        """Place the chosen status with the default category.

        Returns:
            The new node id, or None if nothing was added.
        """
        status_id = self.state.pending_status_id
        if status_id is None:
            self._notify_error("Select a status to add first")
            return None
        if not self.can_add_node:
            self.state.pending_status_id = None
            self._notify_error("Adding statuses is unavailable")
            return None

        node_id = self._run(
            self._model.add_node, status_id, self._model.registry.default
        )
        self.state.pending_status_id = None
        if node_id is not None:
            self.state.clear_selection()
            self.state.selected_node_id = node_id
        return node_id

    # -------------------------------------------------------------------------
    # Node popover
    # -------------------------------------------------------------------------

    def open_category_popover(self, node_id: str) -> bool:
        if not self._model.has_node(node_id):
            self._report(NotFoundError("node", node_id))
            return False
        self.state.open_popover_node_id = node_id
        return True

    def close_category_popover(self) -> None:
        self.state.open_popover_node_id = None

    def change_category(self, node_id: str, category: str) -> bool:
        ok = self._attempt(self._model.recategorize, node_id, category)
        if ok:
            self.close_category_popover()
        return ok

    def set_initial(self, node_id: str) -> bool:
        ok = self._attempt(self._model.set_initial, node_id)
        if ok:
            self.close_category_popover()
        return ok

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select_node(self, node_id: str) -> None:
        self.state.clear_selection()
        if self._model.has_node(node_id):
            self.state.selected_node_id = node_id

    def select_edge(self, edge_id: str) -> None:
        self.state.clear_selection()
        if self._model.has_edge(edge_id):
            self.state.selected_edge_id = edge_id

    def clear_selection(self) -> None:
        self.state.clear_selection()

    # -------------------------------------------------------------------------
    # Edge gestures
    # -------------------------------------------------------------------------

    def connect(self, source_node_id: str, target_node_id: str) -> str | None:
        """Draw a transition; the new edge becomes the selection."""
        edge_id = self._run(self._model.connect, source_node_id, target_node_id)
        if edge_id is not None:
            self.state.clear_selection()
            self.state.selected_edge_id = edge_id
        return edge_id

    def relabel_edge(self, edge_id: str, label: str) -> bool:
        return self._attempt(self._model.relabel_edge, edge_id, label)

    def request_delete_edge(self, edge_id: str) -> PendingConfirmation | None:
        """Ask for confirmation before deleting a transition."""
        edge = self._run(self._model.get_edge, edge_id)
        if edge is None:
            return None

        name = f"'{edge.label}'" if edge.label else "this transition"
        confirmation = PendingConfirmation(
            kind=ConfirmationKind.DELETE_EDGE,
            target_id=edge_id,
            message=f"Delete {name}? This cannot be undone.",
            affected_edge_ids=(edge_id,),
        )
        self.state.confirmation = confirmation
        return confirmation

    # -------------------------------------------------------------------------
    # Node removal
    # -------------------------------------------------------------------------

    def request_remove_node(self, node_id: str) -> PendingConfirmation | None:
        """Ask for confirmation before removing a status and its transitions."""
        node = self._run(self._model.get_node, node_id)
        if node is None:
            return None

        affected = tuple(self._model.edges_touching(node_id))
        message = f"Remove status '{node.label}' from the workflow?"
        if affected:
            message += f" Its {len(affected)} connected transition(s) will also be removed."

        confirmation = PendingConfirmation(
            kind=ConfirmationKind.REMOVE_NODE,
            target_id=node_id,
            message=message,
            affected_edge_ids=affected,
        )
        self.state.confirmation = confirmation
        return confirmation

    # -------------------------------------------------------------------------
    # Confirmation dialog
    # -------------------------------------------------------------------------

    def confirm(self) -> bool:
        """Carry out the pending destructive action."""
        confirmation = self.state.confirmation
        self.state.confirmation = None
        if confirmation is None:
            return False

        if confirmation.kind == ConfirmationKind.DELETE_EDGE:
            ok = self._attempt(self._model.disconnect, confirmation.target_id)
            if ok:
                self.state.forget_edge(confirmation.target_id)
            return ok

        removed = self._run(self._model.remove_node, confirmation.target_id)
        if removed is None:
            return False
        self.state.forget_node(confirmation.target_id)
        for edge_id in removed:
            self.state.forget_edge(edge_id)
        return True

    def cancel_confirmation(self) -> None:
        self.state.confirmation = None

    # -------------------------------------------------------------------------
    # Notices
    # -------------------------------------------------------------------------

    def dismiss_notices(self) -> None:
        self.state.notices.clear()

    def _run(self, operation: Callable[..., T], *args: Any) -> T | None:
        """Call a model operation, converting a rejection into a notice."""
        try:
            return operation(*args)
        except WorkflowGraphError as e:
            self._report(e)
            return None

    def _attempt(self, operation: Callable[..., Any], *args: Any) -> bool:
        """Like _run, for operations that return nothing."""
        try:
            operation(*args)
        except WorkflowGraphError as e:
            self._report(e)
            return False
        return True

    def _report(self, error: WorkflowGraphError) -> None:
        logger.info("Rejected editor action: %s", error)
        self.state.notices.append(
            Notice(level=NoticeLevel.ERROR, message=str(error), code=error.code)
        )

    def _notify_error(self, message: str) -> None:
        self.state.notices.append(Notice(level=NoticeLevel.ERROR, message=message))
