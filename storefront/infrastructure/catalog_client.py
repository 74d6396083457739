"""Catalog document sources.

Fetches the catalog document over HTTP or reads it from disk. Every
failure mode surfaces as CatalogUnavailableError so the view can show
an explicit error state instead of waiting forever.
"""

import json
from pathlib import Path
from typing import Any, Protocol

import httpx
import structlog
from pydantic import ValidationError

from storefront.catalog.models import CatalogDocument
from storefront.domain.exceptions import CatalogUnavailableError

logger = structlog.get_logger()


class CatalogSource(Protocol):
    """Anything the view orchestrator can load a catalog from."""

    source: str

    async def fetch(self) -> CatalogDocument:
        """Load and validate the catalog document.

        Raises:
            CatalogUnavailableError: If the document cannot be loaded.
        """
        ...


def parse_catalog(source: str, data: Any) -> CatalogDocument:
    """Validate raw catalog data.

    Args:
        source: Where the data came from, for error reporting.
        data: Decoded JSON document.

    Returns:
        Validated CatalogDocument.

    Raises:
        CatalogUnavailableError: If the structure is invalid.
    """
    try:
        return CatalogDocument.model_validate(data)
    except ValidationError as e:
        logger.error(
            "Catalog document failed validation",
            source=source,
            error_count=e.error_count(),
        )
        raise CatalogUnavailableError(source, f"Invalid catalog document: {e.error_count()} error(s)") from e


class CatalogClient:
    """HTTP client for the published catalog document.

    Example usage:
        async with CatalogClient("https://shop.example/data/products.json") as client:
            document = await client.fetch()
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize catalog client.

        Args:
            url: Catalog document URL.
            timeout: Request timeout in seconds.
            transport: Optional transport override (used by tests).
        """
        self.source = url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def fetch(self) -> CatalogDocument:
        """Fetch and validate the catalog document.

        Returns:
            Validated CatalogDocument.

        Raises:
            CatalogUnavailableError: On network errors, non-success status,
                a body that is not JSON, or an invalid document.
        """
        client = await self._get_client()

        try:
            logger.debug("Fetching catalog", url=self.source)
            response = await client.get(self.source)
        except httpx.TimeoutException as e:
            logger.error("Catalog request timed out", url=self.source, timeout=self.timeout)
            raise CatalogUnavailableError(self.source, "Request timed out") from e
        except httpx.InvalidURL as e:
            logger.error("Catalog URL is invalid", url=self.source, error=str(e))
            raise CatalogUnavailableError(self.source, f"Invalid URL: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Catalog request failed", url=self.source, error=str(e))
            raise CatalogUnavailableError(self.source, f"Request failed: {e}") from e

        if not response.is_success:
            logger.error("Catalog request returned error status", url=self.source, status_code=response.status_code)
            raise CatalogUnavailableError(
                self.source,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogUnavailableError(self.source, "Response is not valid JSON") from e

        document = parse_catalog(self.source, data)
        logger.info(
            "Catalog fetched",
            url=self.source,
            products=len(document.products),
            categories=len(document.categories),
        )
        return document


class FileCatalogSource:
    """Catalog document read from a local JSON file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.source = str(self.path)

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> "FileCatalogSource":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def fetch(self) -> CatalogDocument:
        """Read and validate the catalog file.

        Raises:
            CatalogUnavailableError: If the file is missing, unreadable,
                not JSON, or not a valid document.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Catalog file unreadable", path=self.source, error=str(e))
            raise CatalogUnavailableError(self.source, f"Cannot read file: {e}") from e
        except UnicodeDecodeError as e:
            logger.error("Catalog file is not valid UTF-8", path=self.source, error=str(e))
            raise CatalogUnavailableError(self.source, f"File is not valid UTF-8: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CatalogUnavailableError(self.source, f"File is not valid JSON: {e}") from e

        document = parse_catalog(self.source, data)
        logger.info("Catalog loaded from file", path=self.source, products=len(document.products))
        return document


def catalog_source_for(location: str, timeout: float = 10.0) -> CatalogClient | FileCatalogSource:
    """Pick a catalog source for a URL or a file path.

    Args:
        location: http(s) URL or filesystem path.
        timeout: Request timeout for URLs.

    Returns:
        CatalogClient for URLs, FileCatalogSource otherwise.
    """
    if location.startswith(("http://", "https://")):
        return CatalogClient(location, timeout=timeout)
    return FileCatalogSource(location)
