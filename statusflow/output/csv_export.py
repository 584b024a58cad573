"""CSV formatting for permission and transition exports.

Quoting follows RFC 4180: a value is wrapped in double quotes, with inner
quotes doubled, only if it contains a comma, a double quote or a newline.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from ..graph.node_types import WorkflowGraph

CSV_HEADER = [
    "Permission",
    "Item Type Set",
    "Action",
    "Field",
    "Status",
    "Transition",
    "Role",
    "Grant",
    "User",
    "Negated User",
    "Group",
    "Negated Group",
]

ACTION_PRESERVED = "Preserved"
ACTION_REMOVED = "Removed"

GLOBAL_GRANT = "Global"

PERMISSION_TYPE_NAMES = {
    "FIELD_OWNERS": "FieldOwnerPermission",
    "FIELD_EDITORS": "FieldStatusPermission",
    "FIELD_VIEWERS": "FieldStatusPermission",
    "EDITORS": "FieldStatusPermission",
    "VIEWERS": "FieldStatusPermission",
    "STATUS_OWNERS": "StatusOwnerPermission",
    "STATUS_OWNER": "StatusOwnerPermission",
    "EXECUTORS": "ExecutorPermission",
    "EXECUTOR": "ExecutorPermission",
    "WORKERS": "WorkerPermission",
    "CREATORS": "CreatorPermission",
}


def escape(value: Any) -> str:
    """Escape a single CSV field. None becomes the empty string."""
    if value is None:
        return ""
    text = str(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def format_transition(
    from_status_name: str | None,
    to_status_name: str | None,
    transition_name: str | None,
) -> str:
    """Format a transition as ``From -> To (Name)``.

    Returns the empty string if either status name is missing; the
    parenthesised part is omitted when the transition has no name.
    """
    if not from_status_name or not to_status_name:
        return ""

    text = f"{escape(from_status_name)} -> {escape(to_status_name)}"
    if transition_name:
        text += f" ({escape(transition_name)})"
    return text


def build_row(
    permission_name: str,
    item_type_set_name: str,
    action: str,
    field_name: str = "",
    status_name: str = "",
    transition_name: str = "",
    role_name: str = "",
    grant: str = "",
    user_name: str = "",
    negated_user_name: str = "",
    group_name: str = "",
    negated_group_name: str = "",
) -> str:
    """Join the twelve export columns into one CSV line.

    ``item_type_set_name`` and ``action`` are written as given, without
    escaping; callers pass them pre-escaped.
    """
    return ",".join(
        [
            escape(permission_name),
            item_type_set_name,
            action,
            escape(field_name),
            escape(status_name),
            escape(transition_name),
            escape(role_name),
            escape(grant),
            escape(user_name),
            escape(negated_user_name),
            escape(group_name),
            escape(negated_group_name),
        ]
    )


def format_header() -> str:
    return ",".join(escape(column) for column in CSV_HEADER)


def backend_permission_name(permission_type: str) -> str:
    """Map a permission type tag to the backend permission class name."""
    return PERMISSION_TYPE_NAMES.get(permission_type, permission_type)


@dataclass
class ProjectRoles:
    """Roles assigned to a permission within one project."""

    project_name: str
    roles: list[str] = field(default_factory=list)


@dataclass
class GrantDetails:
    """Members of a grant, as display names."""

    users: list[str] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    negated_users: list[str] = field(default_factory=list)
    negated_groups: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.users or self.groups or self.negated_users or self.negated_groups)

    @classmethod
    def from_payload(cls, data: dict[str, Any] | None) -> "GrantDetails":
        """Build from an admin API grant object.

        Users are named by username, then full name, then ``User #id``;
        groups by name, then ``Group #id``.
        """
        data = data or {}
        return cls(
            users=[_user_name(u) for u in data.get("users") or []],
            groups=[_group_name(g) for g in data.get("groups") or []],
            negated_users=[_user_name(u) for u in data.get("negatedUsers") or []],
            negated_groups=[_group_name(g) for g in data.get("negatedGroups") or []],
        )


def _user_name(user: dict[str, Any]) -> str:
    if user.get("username"):
        return user["username"]
    if user.get("fullName"):
        return user["fullName"]
    return f"User #{user['id']}" if user.get("id") else ""


def _group_name(group: dict[str, Any]) -> str:
    return group.get("name") or f"Group #{group.get('id')}"


@dataclass
class ProjectGrant:
    """A permission's roles and grant within one project."""

    project_name: str
    roles: list[str] = field(default_factory=list)
    grant_name: str | None = None
    details: GrantDetails | None = None

    @property
    def label(self) -> str:
        if self.grant_name:
            return f"{self.project_name}: {self.grant_name}"
        return self.project_name


@dataclass
class PermissionRecord:
    """One permission as it appears in an impact export.

    ``grant_name`` and ``grant_details`` describe the permission's global
    grant; ``assigned_grants`` lists global grant names known without their
    members.
    """

    permission_type: str | None
    item_type_set_name: str | None = None
    permission_id: int | None = None
    field_name: str | None = None
    status_name: str | None = None
    transition: str | None = None
    from_status_name: str | None = None
    to_status_name: str | None = None
    transition_name: str | None = None
    assigned_roles: list[str] = field(default_factory=list)
    assigned_grants: list[str] = field(default_factory=list)
    grant_name: str | None = None
    grant_details: GrantDetails | None = None
    project_roles: list[ProjectRoles] = field(default_factory=list)
    project_grants: list[ProjectGrant] = field(default_factory=list)
    can_be_preserved: bool = False

    def transition_label(self) -> str:
        if self.transition:
            return self.transition
        return format_transition(
            self.from_status_name, self.to_status_name, self.transition_name
        )

    @property
    def has_global_grant(self) -> bool:
        return bool(self.grant_name or self.assigned_grants or self.grant_details is not None)


def _member_rows(row, grant: str, details: GrantDetails) -> list[str]:
    return (
        [row(grant=grant, user_name=name) for name in details.users]
        + [row(grant=grant, group_name=name) for name in details.groups]
        + [row(grant=grant, negated_user_name=name) for name in details.negated_users]
        + [row(grant=grant, negated_group_name=name) for name in details.negated_groups]
    )


def permission_rows(
    record: PermissionRecord,
    preserved_ids: Iterable[int] = (),
    include_unassigned: bool = False,
) -> list[str]:
    """CSV lines for one permission.

    Rows come in this order:

    - one per global role, with the ``Global`` grant column;
    - for the global grant, one per user, group, negated user and negated
      group, labelled ``Global: <grant>``. A grant without members gets one
      row per name in ``assigned_grants``, else a single row;
    - one per project role, with the project name as grant;
    - for each project grant, its roles, then one row per member labelled
      ``<project>: <grant>``, or a single row when it has no members.

    A permission with no assignment produces no line unless
    ``include_unassigned`` is set, in which case it gets one line with empty
    role and grant columns.
    """
    preserved = set(preserved_ids)
    selected = record.permission_id is not None and record.permission_id in preserved
    action = ACTION_PRESERVED if selected and record.can_be_preserved else ACTION_REMOVED

    base = {
        "permission_name": record.permission_type or "N/A",
        "item_type_set_name": escape(record.item_type_set_name or "N/A"),
        "action": action,
        "field_name": record.field_name or "",
        "status_name": record.status_name or "",
        "transition_name": record.transition_label(),
    }

    def row(**columns: str) -> str:
        return build_row(**base, **columns)

    rows = [row(role_name=role, grant=GLOBAL_GRANT) for role in record.assigned_roles]

    if record.has_global_grant:
        details = record.grant_details
        if details is not None and not details.is_empty:
            label = (
                f"{GLOBAL_GRANT}: {record.grant_name}" if record.grant_name else GLOBAL_GRANT
            )
            rows.extend(_member_rows(row, label, details))
        elif record.assigned_grants:
            rows.extend(
                row(grant=f"{GLOBAL_GRANT}: {name}") for name in record.assigned_grants
            )
        elif record.grant_name:
            rows.append(row(grant=f"{GLOBAL_GRANT}: {record.grant_name}"))
        else:
            rows.append(row(grant=GLOBAL_GRANT))

    for project in record.project_roles:
        rows.extend(row(role_name=role, grant=project.project_name) for role in project.roles)

    for project_grant in record.project_grants:
        rows.extend(
            row(role_name=role, grant=project_grant.project_name)
            for role in project_grant.roles
        )
        details = project_grant.details
        if details is not None and not details.is_empty:
            rows.extend(_member_rows(row, project_grant.label, details))
        elif details is not None or project_grant.grant_name:
            rows.append(row(grant=project_grant.label))

    if not rows and include_unassigned:
        rows.append(row())
    return rows


def export_permissions_csv(
    records: Iterable[PermissionRecord],
    preserved_ids: Iterable[int] = (),
    bom: bool = False,
    include_unassigned: bool = False,
) -> str:
    """Render a full export: header line followed by every permission's rows.

    Lines are joined with ``\\n``. With ``bom`` the text starts with a UTF-8
    byte order mark, which spreadsheet tools use to detect the encoding.
    """
    preserved = set(preserved_ids)
    lines = [format_header()]
    for record in records:
        lines.extend(permission_rows(record, preserved, include_unassigned))
    text = "\n".join(lines)
    return "\ufeff" + text if bom else text


def transition_records(
    graph: WorkflowGraph,
    item_type_set_name: str | None = None,
    roles: Iterable[str] = (),
) -> list[PermissionRecord]:
    """One executor permission record per transition of a workflow."""
    role_list = list(roles)
    records = []
    for source, target, edge in graph.iter_transitions():
        records.append(
            PermissionRecord(
                permission_type=backend_permission_name("EXECUTORS"),
                item_type_set_name=item_type_set_name,
                permission_id=edge.persisted_transition_id,
                from_status_name=source.label if source else None,
                to_status_name=target.label if target else None,
                transition_name=edge.label,
                assigned_roles=role_list,
            )
        )
    return records
