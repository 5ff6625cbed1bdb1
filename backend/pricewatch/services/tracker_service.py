"""Price tracking orchestration.

Wires validation, URL normalization, rate limiting, caching, scraping and
overview generation into a single request/response cycle:

  1. Validate the body (exactly one of productUrl / productId, a ZIP code)
  2. Build or normalize the canonical product URL
  3. Count the request against the client's quota
  4. Serve from cache when a fresh record exists
  5. Otherwise scrape the page, attach an overview and cache the result
"""

from typing import Optional, Tuple

import structlog

from pricewatch.core.exceptions import InvalidRequestBody
from pricewatch.scrapers.base import BaseProductScraper, ProductRecord
from pricewatch.scrapers.utils.normalizer import (
    build_product_url,
    normalize_product_url,
    validate_product_id,
    validate_product_url,
    validate_zip_code,
)
from pricewatch.schemas.track_price import TrackPriceRequest
from pricewatch.services.cache_service import ProductCache, cache_key_for_product
from pricewatch.services.description_service import DescriptionGenerator
from pricewatch.services.rate_limiter import ClientRateLimiter

logger = structlog.get_logger(__name__)

OVERVIEW_UNAVAILABLE = "Product overview not available at this time."


class PriceTrackerService:
    """Service for single-product price lookups."""

    def __init__(
        self,
        scraper: BaseProductScraper,
        cache: ProductCache,
        rate_limiter: ClientRateLimiter,
        describer: Optional[DescriptionGenerator] = None,
    ):
        self.scraper = scraper
        self.cache = cache
        self.rate_limiter = rate_limiter
        self.describer = describer or DescriptionGenerator()
        self.logger = logger.bind(service="tracker_service")

    def resolve_product_url(self, request: TrackPriceRequest) -> Tuple[str, str]:
        """Validate the request body.

        Returns:
            Tuple of (canonical product URL, ZIP code)

        Raises:
            InvalidRequestBody: Neither or both of productUrl / productId given,
                malformed productId or ZIP code
            MissingLocale: No ZIP code
            InvalidUrl: Unparseable productUrl
            UnsupportedMarketplace: productUrl outside Amazon.in / Amazon.com
        """
        product_url = (request.product_url or "").strip()
        product_id = (request.product_id or "").strip()

        if not product_url and not product_id:
            raise InvalidRequestBody("Either productUrl or productId is required")
        if product_url and product_id:
            raise InvalidRequestBody("Provide either productUrl or productId, not both")

        zip_code = validate_zip_code(request.zip_code)

        if product_id:
            return build_product_url(validate_product_id(product_id), zip_code), zip_code

        return normalize_product_url(validate_product_url(product_url)), zip_code

    async def track(self, request: TrackPriceRequest, client_id: str) -> ProductRecord:
        """Look up the current price of one product.

        Args:
            request: Parsed request body
            client_id: Caller identifier used for rate limiting

        Returns:
            ProductRecord with ``overview`` filled in

        Raises:
            PriceWatchException: Any validation, rate-limit, fetch or
                extraction failure
        """
        url, zip_code = self.resolve_product_url(request)

        await self.rate_limiter.admit(client_id)

        cache_key = cache_key_for_product(url, zip_code)
        cached = await self.cache.get(cache_key)
        if cached is not None:
            self.logger.info("returning_cached_product", url=url)
            return cached

        record = await self.scraper.fetch_product(url, zip_code)
        record.overview = self._generate_overview(record.name)

        await self.cache.set(cache_key, record)
        return record

    def _generate_overview(self, name: str) -> str:
        try:
            return self.describer.generate(name)
        except Exception as e:
            self.logger.error("overview_generation_failed", error=str(e), exc_info=True)
            return OVERVIEW_UNAVAILABLE

    async def close(self) -> None:
        """Release the scraper's HTTP client and clear in-memory state."""
        await self.scraper.close()
        await self.cache.close()
        await self.rate_limiter.close()
