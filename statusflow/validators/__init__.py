"""Validators for structural validation of workflow graphs."""

from .base import Severity, ValidationIssue, ValidationResult
from .orphan_detector import check_isolated_statuses, check_transition_shapes
from .reachability import check_unreachable_statuses, reachable_node_ids
from .reference_integrity import check_reference_integrity
from .runner import run_validators, validate_document_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_isolated_statuses",
    "check_transition_shapes",
    "check_unreachable_statuses",
    "reachable_node_ids",
    "check_reference_integrity",
    "run_validators",
    "validate_document_file",
]
