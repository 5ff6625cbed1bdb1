"""Amazon product page scraper.

Fetches a single www.amazon.com / www.amazon.in product page with a plain
HTTP GET and pulls the title, price, image and description out of it with
BeautifulSoup. Prices are returned as text in the marketplace's own
currency; the currency symbol is decided by hostname alone.
"""

from bs4 import BeautifulSoup

from pricewatch.core.exceptions import ExtractionFailed
from pricewatch.scrapers.base import BaseProductScraper, ProductRecord
from pricewatch.scrapers.selectors import (
    DESCRIPTION_CANDIDATES,
    IMAGE_CANDIDATES,
    NAME_CANDIDATES,
    PRICE_CANDIDATES,
    first_match,
)
from pricewatch.scrapers.utils.normalizer import currency_for_url, truncate_description


class AmazonProductScraper(BaseProductScraper):
    """Amazon.com / Amazon.in product page scraper."""

    marketplace = "amazon"

    async def fetch_product(self, url: str, zip_code: str) -> ProductRecord:
        html = await self._fetch_html(url)
        record = self.parse_product_page(html, url, zip_code)
        self.logger.info("product_extracted", url=url, price=record.price)
        return record

    def parse_product_page(self, html: str, url: str, zip_code: str) -> ProductRecord:
        """Extract a ProductRecord from product page HTML.

        Args:
            html: Raw page HTML
            url: Canonical URL the page was fetched from
            zip_code: Locale code stamped on the record

        Returns:
            ProductRecord without ``overview``

        Raises:
            ExtractionFailed: If the name or price cannot be found
        """
        soup = BeautifulSoup(html, "html.parser")

        name = first_match(soup, NAME_CANDIDATES)
        if not name:
            self.logger.warning("name_not_found", url=url)
            raise ExtractionFailed("name")

        price = first_match(soup, PRICE_CANDIDATES)
        if not price:
            self.logger.warning("price_not_found", url=url)
            raise ExtractionFailed("price")

        description = first_match(soup, DESCRIPTION_CANDIDATES) or ""

        return ProductRecord(
            name=name,
            price=price,
            currency=currency_for_url(url),
            timestamp=self.clock(),
            url=url,
            zip_code=zip_code,
            image_url=first_match(soup, IMAGE_CANDIDATES),
            description=truncate_description(description),
        )
