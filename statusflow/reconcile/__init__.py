"""Persistence reconciliation of workflow transitions."""

from .reconciler import (
    ChangeSet,
    TransitionCreate,
    TransitionDelete,
    TransitionUpdate,
    reconcile,
)
from .payload import build_save_payload

__all__ = [
    "ChangeSet",
    "TransitionCreate",
    "TransitionDelete",
    "TransitionUpdate",
    "reconcile",
    "build_save_payload",
]
