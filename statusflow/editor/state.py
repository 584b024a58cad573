"""Presentational state of the graph editor.

Nothing here is part of the persisted workflow.
"""

from dataclasses import dataclass, field
from enum import Enum


class NoticeLevel(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A user-visible message."""

    level: NoticeLevel
    message: str
    code: str | None = None


class ConfirmationKind(str, Enum):
    DELETE_EDGE = "delete_edge"
    REMOVE_NODE = "remove_node"


@dataclass(frozen=True)
class PendingConfirmation:
    """A destructive action waiting for the operator's confirmation."""

    kind: ConfirmationKind
    target_id: str
    message: str
    affected_edge_ids: tuple[str, ...] = ()


@dataclass
class ViewState:
    """Selection, popover and dialog state of one editing session."""

    selected_node_id: str | None = None
    selected_edge_id: str | None = None
    open_popover_node_id: str | None = None
    pending_status_id: int | None = None
    confirmation: PendingConfirmation | None = None
    notices: list[Notice] = field(default_factory=list)

    def clear_selection(self) -> None:
        self.selected_node_id = None
        self.selected_edge_id = None

    def forget_node(self, node_id: str) -> None:
        """Drop every reference to a node that no longer exists."""
        if self.selected_node_id == node_id:
            self.selected_node_id = None
        if self.open_popover_node_id == node_id:
            self.open_popover_node_id = None

    def forget_edge(self, edge_id: str) -> None:
        if self.selected_edge_id == edge_id:
            self.selected_edge_id = None
