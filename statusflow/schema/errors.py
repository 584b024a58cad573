"""Exceptions raised while reading workflow documents."""


class DocumentError(Exception):
    """Base class for document problems; ``path`` is None for in-memory text."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class DocumentLoadError(DocumentError):
    """The document could not be read or is not a YAML mapping."""


class DocumentValidationError(DocumentError):
    """The document was read but does not describe a workflow.

    ``errors`` holds one ``{"loc", "msg", "type"}`` mapping per problem.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        path: str | None = None,
    ):
        self.errors = list(errors or [])
        super().__init__(message, path)
