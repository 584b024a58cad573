"""Exceptions raised by the admin API client."""


class CatalogLoadError(Exception):
    """Raised when reference data cannot be fetched or decoded."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
