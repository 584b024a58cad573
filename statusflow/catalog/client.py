"""HTTP client for the admin API reference data."""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..schema.models import StatusDefinition, WorkflowView
from .errors import CatalogLoadError
from .registry import CategoryRegistry
from .statuses import StatusCatalog

logger = logging.getLogger(__name__)

_STATUS_LIST = TypeAdapter(list[StatusDefinition])
_CATEGORY_LIST = TypeAdapter(list[str])


class AdminApiClient:
    """Async client for the endpoints the workflow editor reads.

    Each call is a one-shot request: no retry, no caching.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AdminApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_statuses(self) -> list[StatusDefinition]:
        """GET /statuses.

        Raises:
            CatalogLoadError: On transport errors, non-2xx responses or
                malformed payloads.
        """
        data = await self._get_json("/statuses")
        try:
            return _STATUS_LIST.validate_python(data)
        except ValidationError as e:
            raise CatalogLoadError(f"Malformed status list: {e}") from e

    async def fetch_categories(self) -> list[str]:
        """GET /statuses/categories."""
        data = await self._get_json("/statuses/categories")
        try:
            return _CATEGORY_LIST.validate_python(data)
        except ValidationError as e:
            raise CatalogLoadError(f"Malformed category list: {e}") from e

    async def fetch_workflow(self, workflow_id: int) -> WorkflowView:
        """GET /workflows/{id}."""
        data = await self._get_json(f"/workflows/{workflow_id}")
        try:
            return WorkflowView.model_validate(data)
        except ValidationError as e:
            raise CatalogLoadError(f"Malformed workflow {workflow_id}: {e}") from e

    async def _get_json(self, path: str) -> Any:
        try:
            response = await self._client.get(path)
        except httpx.TimeoutException as e:
            raise CatalogLoadError(f"Timed out requesting {path}") from e
        except httpx.HTTPError as e:
            raise CatalogLoadError(f"Request to {path} failed: {e}") from e

        if response.status_code != 200:
            raise CatalogLoadError(
                f"GET {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise CatalogLoadError(f"GET {path} returned invalid JSON") from e


async def load_status_catalog(client: AdminApiClient) -> StatusCatalog:
    """Load the status catalog, falling back to an empty one on failure."""
    try:
        statuses = await client.fetch_statuses()
    except CatalogLoadError:
        logger.exception("Failed to load status catalog")
        return StatusCatalog()
    logger.debug("Loaded %d statuses", len(statuses))
    return StatusCatalog(statuses)


async def load_category_registry(client: AdminApiClient) -> CategoryRegistry:
    """Load the category registry, falling back to an empty one on failure.

    An empty registry disables node creation for the session.
    """
    try:
        categories = await client.fetch_categories()
    except CatalogLoadError:
        logger.exception("Failed to load status categories")
        return CategoryRegistry()
    logger.debug("Loaded %d status categories", len(categories))
    return CategoryRegistry(categories)
