"""Services module for business logic.

This module contains the in-memory stores (product cache, client rate
limiter), the overview generator and the tracker service that orchestrates
a price lookup.
"""

from pricewatch.services.cache_service import ProductCache, cache_key_for_product
from pricewatch.services.description_service import DescriptionGenerator
from pricewatch.services.rate_limiter import ClientQuota, ClientRateLimiter
from pricewatch.services.tracker_service import PriceTrackerService

__all__ = [
    "ProductCache",
    "cache_key_for_product",
    "DescriptionGenerator",
    "ClientQuota",
    "ClientRateLimiter",
    "PriceTrackerService",
]
