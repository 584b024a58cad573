"""Editor layer: controller and presentational state."""

from .controller import GraphEditorController
from .state import (
    ConfirmationKind,
    Notice,
    NoticeLevel,
    PendingConfirmation,
    ViewState,
)

__all__ = [
    "GraphEditorController",
    "ConfirmationKind",
    "Notice",
    "NoticeLevel",
    "PendingConfirmation",
    "ViewState",
]
