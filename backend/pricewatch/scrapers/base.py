"""Base scraper interface and the product record it produces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import httpx
import structlog

from pricewatch.core.clock import Clock, utc_now
from pricewatch.core.exceptions import FetchFailed
from pricewatch.scrapers.utils.headers import build_browser_headers


@dataclass
class ProductRecord:
    """Product data extracted from a single product page."""

    name: str
    price: str  # Decimal text, currency symbols stripped
    currency: str  # Symbol, e.g. "$" or "₹"
    timestamp: datetime  # UTC
    url: str  # Canonical product URL
    zip_code: str
    image_url: Optional[str] = None
    description: Optional[str] = None
    overview: Optional[str] = None

    def __post_init__(self):
        """Validate data after initialization."""
        if not self.name:
            raise ValueError("name is required")
        if not self.price:
            raise ValueError("price is required")

    def to_response(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON shape returned by the API."""
        return {
            "name": self.name,
            "price": self.price,
            "currency": self.currency,
            "timestamp": self.timestamp,
            "imageUrl": self.image_url,
            "url": self.url,
            "description": self.description,
            "overview": self.overview,
            "zipCode": self.zip_code,
        }


class BaseProductScraper(ABC):
    """Abstract base class for product page scrapers.

    Owns the outbound ``httpx.AsyncClient`` unless one is injected, in which
    case the caller is responsible for closing it.
    """

    marketplace: str = ""  # Must be overridden in subclass

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        clock: Clock = utc_now,
    ):
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=True
        )
        self.timeout = timeout
        self.headers = headers or build_browser_headers()
        self.clock = clock
        self.logger = structlog.get_logger(__name__).bind(scraper=self.marketplace)

    @abstractmethod
    async def fetch_product(self, url: str, zip_code: str) -> ProductRecord:
        """Fetch and parse the product page at ``url``.

        Args:
            url: Canonical product URL
            zip_code: Locale code stamped on the record

        Returns:
            ProductRecord without ``overview``

        Raises:
            FetchFailed: If the page could not be downloaded
            ExtractionFailed: If a required field is missing
        """
        pass

    async def _fetch_html(self, url: str) -> str:
        """Issue a single GET for ``url`` and return the body.

        Raises:
            FetchFailed: On transport errors, timeouts and non-2xx responses
        """
        self.logger.info("scraping_url", url=url)

        try:
            response = await self.http_client.get(
                url, headers=self.headers, timeout=self.timeout
            )
        except httpx.HTTPError as e:
            self.logger.warning("fetch_failed", url=url, error=str(e))
            raise FetchFailed(f"Failed to fetch product page: {e}") from e

        if not response.is_success:
            self.logger.warning("fetch_bad_status", url=url, status=response.status_code)
            raise FetchFailed(
                f"Failed to fetch product page: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
            )

        return response.text

    async def close(self) -> None:
        """Close the HTTP client if this scraper created it."""
        if self._owns_client:
            await self.http_client.aclose()
