"""Scraper utilities for URL normalization and request headers."""

from .headers import build_browser_headers
from .normalizer import (
    MARKETPLACE_DOMAINS,
    build_product_url,
    clean_price_text,
    currency_for_url,
    is_supported_host,
    normalize_product_url,
    truncate_description,
    validate_product_id,
    validate_product_url,
    validate_zip_code,
)


__all__ = [
    # Headers
    "build_browser_headers",
    # Normalization
    "MARKETPLACE_DOMAINS",
    "build_product_url",
    "clean_price_text",
    "currency_for_url",
    "is_supported_host",
    "normalize_product_url",
    "truncate_description",
    # Validation
    "validate_product_id",
    "validate_product_url",
    "validate_zip_code",
]
