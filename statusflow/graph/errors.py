"""Errors raised by the workflow graph model."""


class WorkflowGraphError(Exception):
    """Base class for rejected graph operations.

    A rejected operation never leaves a partial mutation behind.
    """

    code = "GRAPH_ERROR"


class DuplicateStatusError(WorkflowGraphError):
    """Raised when a status is already placed in the graph."""

    code = "DUPLICATE_STATUS"

    def __init__(self, status_id: int, node_id: str | None = None):
        self.status_id = status_id
        self.node_id = node_id
        super().__init__(f"Status {status_id} is already placed in this workflow")


class NotFoundError(WorkflowGraphError):
    """Raised when an operation references an unknown node, edge or status."""

    code = "NOT_FOUND"

    def __init__(self, kind: str, identifier: str | int):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Unknown {kind} '{identifier}'")


class InvalidCategoryError(WorkflowGraphError):
    """Raised when a category is not in the loaded registry."""

    code = "INVALID_CATEGORY"

    def __init__(self, category: str | None):
        self.category = category
        if category is None:
            message = "No status category is available"
        else:
            message = f"Category '{category}' is not a registered status category"
        super().__init__(message)


class DanglingReferenceError(WorkflowGraphError):
    """Raised when a transition endpoint cannot be resolved to a server status."""

    code = "DANGLING_REFERENCE"

    def __init__(self, edge_id: str, status_id: int | None = None):
        self.edge_id = edge_id
        self.status_id = status_id
        if status_id is None:
            message = f"Transition '{edge_id}' references a node that no longer exists"
        else:
            message = f"Transition '{edge_id}' references unknown status {status_id}"
        super().__init__(message)
