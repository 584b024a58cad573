"""Output formatting: validation reports, change-sets and CSV exports."""

from .csv_export import (
    CSV_HEADER,
    GrantDetails,
    PermissionRecord,
    ProjectGrant,
    ProjectRoles,
    build_row,
    escape,
    export_permissions_csv,
    format_header,
    format_transition,
    permission_rows,
    transition_records,
)
from .formatter import format_change_set, format_validation_result

__all__ = [
    "CSV_HEADER",
    "GrantDetails",
    "PermissionRecord",
    "ProjectGrant",
    "ProjectRoles",
    "build_row",
    "escape",
    "export_permissions_csv",
    "format_header",
    "format_transition",
    "permission_rows",
    "transition_records",
    "format_change_set",
    "format_validation_result",
]
