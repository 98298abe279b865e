"""HTTP catalog provider for the product management API.

Pages through ``GET {base_url}/api/v1/products`` responses shaped as::

    {"success": true,
     "data": [{"id": "1", "sku": "DEMO-001", "name": "...", "variants": [...]}],
     "meta": {"pagination": {"page": 1, "limit": 100, "hasNext": false}}}

Every failure (timeouts, HTTP errors, malformed bodies) is raised as
CatalogUnavailableError, so the batch that asked for the snapshot fails as a
whole.
"""

import asyncio
from typing import Any, Dict, List, Optional

import requests

from skumatch.logging import get_logger

from .exceptions import CatalogUnavailableError
from .provider import CatalogProvider, CatalogSnapshot, coerce_products

logger = get_logger(__name__, component="catalog")

PRODUCTS_PATH = "/api/v1/products"


class HttpCatalogProvider(CatalogProvider):
    """Loads a catalog snapshot from the product API, page by page.

    Attributes:
        base_url: API root, e.g. "https://ppm.example.com"
        timeout: Request timeout in seconds
        page_size: Products requested per page
        max_pages: Safety cap on pagination
    """

    def __init__(
        self,
        base_url: str,
        api_token: Optional[str] = None,
        timeout: int = 30,
        page_size: int = 100,
        max_pages: int = 1000,
        user_agent: str = "skumatch/0.1",
    ) -> None:
        if not base_url or not base_url.strip():
            raise CatalogUnavailableError("Catalog API base URL cannot be empty", source="http")

        self.base_url = base_url.strip().rstrip("/")
        self.source = self.base_url + PRODUCTS_PATH
        self.timeout = timeout
        self.page_size = page_size
        self.max_pages = max_pages

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
        if api_token:
            self._session.headers["Authorization"] = f"Bearer {api_token}"

    async def load(self) -> CatalogSnapshot:
        return await asyncio.to_thread(self.load_sync)

    def close(self) -> None:
        self._session.close()

    def load_sync(self) -> CatalogSnapshot:
        """Blocking variant of load()."""
        entries: List[Dict[str, Any]] = []
        page = 1

        while True:
            body = self._fetch_page(page)
            data = body.get("data")
            if not isinstance(data, list):
                raise CatalogUnavailableError(
                    f"Catalog API page {page} has no 'data' list", source=self.source
                )
            entries.extend(data)

            pagination = (body.get("meta") or {}).get("pagination") or {}
            if not pagination.get("hasNext"):
                break

            page += 1
            if page > self.max_pages:
                raise CatalogUnavailableError(
                    f"Catalog API exceeded {self.max_pages} pages", source=self.source
                )

        logger.debug(
            "Catalog fetched from API",
            extra={
                "event": "catalog.http.loaded",
                "url": self.source,
                "pages": page,
                "product_count": len(entries),
            },
        )
        return coerce_products(entries, source=self.source)

    def _fetch_page(self, page: int) -> Dict[str, Any]:
        """Fetch one page of products.

        Raises:
            CatalogUnavailableError: On timeout, connection failure, HTTP error,
                invalid JSON or an unsuccessful API envelope
        """
        params = {"page": page, "limit": self.page_size}

        try:
            response = self._session.get(self.source, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Catalog API timed out after {self.timeout}s",
                extra={"event": "catalog.http.timeout", "url": self.source, "page": page},
            )
            raise CatalogUnavailableError(
                f"Catalog API request timed out after {self.timeout}s", source=self.source
            ) from e
        except requests.exceptions.RequestException as e:
            raise CatalogUnavailableError(
                f"Catalog API request failed: {e}", source=self.source
            ) from e

        if response.status_code >= 400:
            logger.error(
                f"HTTP {response.status_code} from catalog API",
                extra={
                    "event": "catalog.http.error",
                    "status_code": response.status_code,
                    "url": self.source,
                    "page": page,
                },
            )
            raise CatalogUnavailableError(
                f"Catalog API returned HTTP {response.status_code}: {response.reason}",
                source=self.source,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise CatalogUnavailableError(
                f"Catalog API returned invalid JSON: {e}", source=self.source
            ) from e

        if not isinstance(body, dict) or body.get("success") is False:
            message = ""
            if isinstance(body, dict):
                message = (body.get("error") or {}).get("message", "")
            raise CatalogUnavailableError(
                f"Catalog API reported failure{': ' + message if message else ''}",
                source=self.source,
            )

        return body
