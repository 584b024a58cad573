"""Text and JSON rendering of validation results and change-sets."""

import json
from typing import Any, Iterable, Literal

from ..reconcile.reconciler import ChangeSet
from ..validators.base import ValidationIssue, ValidationResult

OutputFormat = Literal["text", "json"]


def format_validation_result(
    result: ValidationResult,
    format: OutputFormat = "text",
) -> str:
    """Render a validation result.

    The text form lists errors and warnings (each with ``(none)`` when
    empty), notes only when there are any, and ends with a one-line verdict.
    """
    if format == "json":
        return json.dumps(result.to_dict(), indent=2)

    errors, warnings = result.errors, result.warnings
    blocks = [
        _section("ERRORS", [_issue_line(i) for i in errors]),
        _section("WARNINGS", [_issue_line(i) for i in warnings]),
    ]
    if result.infos:
        blocks.append(_section("NOTES", [_issue_line(i) for i in result.infos]))

    if not result.is_valid:
        verdict = f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
    elif warnings:
        verdict = f"Validation passed with {len(warnings)} warning(s)"
    else:
        verdict = "Validation passed"
    blocks.append(verdict)

    return "\n\n".join(blocks)


def format_change_set(
    change_set: ChangeSet,
    format: OutputFormat = "text",
) -> str:
    """Render a reconciler change-set.

    Status ids, not labels, identify transition endpoints: they are what the
    server stores.
    """
    if format == "json":
        return json.dumps(_change_set_data(change_set), indent=2)

    blocks = [
        _section(
            "CREATE",
            [
                f"+ {_quoted(c.name)} {c.from_status_id} -> {c.to_status_id}"
                for c in change_set.to_create
            ],
        ),
        _section(
            "UPDATE",
            [
                f"~ #{u.transition_id} {_quoted(u.name)} "
                f"{u.from_status_id} -> {u.to_status_id} ({', '.join(u.changes)})"
                for u in change_set.to_update
            ],
        ),
        _section(
            "DELETE",
            [
                f"- #{d.transition_id} {_quoted(d.name)} {d.from_status_id} -> {d.to_status_id}"
                for d in change_set.to_delete
            ],
        ),
    ]
    if change_set.issues.issues:
        blocks.append(
            _section("ISSUES", [_issue_line(i) for i in change_set.issues.issues])
        )

    if change_set.is_empty:
        blocks.append("No changes")
    else:
        blocks.append(
            f"{len(change_set.to_create)} to create, "
            f"{len(change_set.to_update)} to update, "
            f"{len(change_set.to_delete)} to delete"
        )

    return "\n\n".join(blocks)


def _section(title: str, lines: Iterable[str]) -> str:
    body = [f"  {line}" for line in lines] or ["  (none)"]
    return "\n".join([f"{title}:", *body])


def _issue_line(issue: ValidationIssue) -> str:
    where = f"[{issue.location}] " if issue.location else ""
    return f"{issue.severity.symbol} {issue.code}: {where}{issue.message}"


def _quoted(name: str) -> str:
    return f"'{name}'" if name else "(unnamed)"


def _change_set_data(change_set: ChangeSet) -> dict[str, Any]:
    return {
        "create": [
            {
                "edge": c.edge_id,
                "name": c.name,
                "from_status": c.from_status_id,
                "to_status": c.to_status_id,
            }
            for c in change_set.to_create
        ],
        "update": [
            {
                "edge": u.edge_id,
                "transition": u.transition_id,
                "name": u.name,
                "from_status": u.from_status_id,
                "to_status": u.to_status_id,
                "changes": list(u.changes),
            }
            for u in change_set.to_update
        ],
        "delete": [
            {
                "transition": d.transition_id,
                "name": d.name,
                "from_status": d.from_status_id,
                "to_status": d.to_status_id,
            }
            for d in change_set.to_delete
        ],
        "issues": [issue.to_dict() for issue in change_set.issues.issues],
    }
