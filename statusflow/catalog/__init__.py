"""Reference data: category registry, status catalog and their loader."""

from .client import AdminApiClient, load_category_registry, load_status_catalog
from .errors import CatalogLoadError
from .registry import CategoryRegistry
from .statuses import StatusCatalog

__all__ = [
    "AdminApiClient",
    "CatalogLoadError",
    "CategoryRegistry",
    "StatusCatalog",
    "load_category_registry",
    "load_status_catalog",
]
