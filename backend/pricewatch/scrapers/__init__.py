"""Product page scrapers.

This package provides:
- ProductRecord, the structure every scraper returns
- BaseProductScraper with the shared HTTP fetch
- AmazonProductScraper for Amazon.com / Amazon.in product pages
- Ordered selector candidates and URL normalization utilities
"""

from .base import BaseProductScraper, ProductRecord
from .amazon import AmazonProductScraper

__all__ = [
    "BaseProductScraper",
    "ProductRecord",
    "AmazonProductScraper",
]
