"""URL and field normalization utilities for Amazon product pages."""

import re
from typing import Optional
from urllib.parse import urlparse

import structlog

from pricewatch.core.exceptions import (
    InvalidRequestBody,
    InvalidUrl,
    MissingLocale,
    UnsupportedMarketplace,
)

logger = structlog.get_logger(__name__)


INDIA_MARKETPLACE = "amazon.in"
US_MARKETPLACE = "amazon.com"
MARKETPLACE_DOMAINS = (INDIA_MARKETPLACE, US_MARKETPLACE)

CURRENCY_INR = "₹"
CURRENCY_USD = "$"

DESCRIPTION_LIMIT = 200

# Product URLs look like /<slug>/dp/<ASIN>, /dp/<ASIN> or /gp/product/<ASIN>
_DP_PATTERN = re.compile(r"/dp/([A-Z0-9]{10})")
_GP_PATTERN = re.compile(r"/gp/product/([A-Z0-9]{10})")

_PRODUCT_ID_PATTERN = re.compile(r"^[A-Za-z0-9]{10}$")
_ZIP_CODE_PATTERN = re.compile(r"^\d{5,6}$", re.ASCII)
_PRICE_NOISE = re.compile(r"[^\d.,]", re.ASCII)


def is_supported_host(host: Optional[str]) -> bool:
    """Return True if ``host`` is amazon.in / amazon.com or a subdomain of one."""
    if not host:
        return False
    host = host.lower()
    return any(host == domain or host.endswith("." + domain) for domain in MARKETPLACE_DOMAINS)


def validate_product_url(url: Optional[str]) -> str:
    """Check that ``url`` is an http(s) URL on a supported marketplace.

    Args:
        url: Raw product URL from the request body

    Returns:
        The URL, stripped of surrounding whitespace

    Raises:
        InvalidUrl: If the URL is empty or cannot be parsed
        UnsupportedMarketplace: If the host is not Amazon.in or Amazon.com
    """
    if not url or not url.strip():
        raise InvalidUrl("Product URL is required")

    url = url.strip()
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError:
        raise InvalidUrl("Please enter a valid URL")

    if parsed.scheme not in ("http", "https") or not host:
        raise InvalidUrl("Please enter a valid URL")

    if not is_supported_host(host):
        raise UnsupportedMarketplace()

    return url


def normalize_product_url(url: str) -> str:
    """Reduce a product URL to its canonical form.

    - ``https://www.amazon.com/Some-Name/dp/B0ABCDEFGH/ref=x?th=1``
      -> ``https://www.amazon.com/dp/B0ABCDEFGH``
    - ``https://www.amazon.in/gp/product/B0ABCDEFGH?psc=1``
      -> ``https://www.amazon.in/gp/product/B0ABCDEFGH``
    - anything else keeps its path, minus query and fragment.

    If the URL cannot be parsed at all, it is returned unchanged.

    Args:
        url: Product URL (already validated)

    Returns:
        Canonical product URL
    """
    try:
        parsed = urlparse(url)
        host = parsed.hostname or ""
    except ValueError as e:
        logger.warning("url_normalize_failed", url=url, error=str(e))
        return url

    base = f"{parsed.scheme}://{host}"

    match = _DP_PATTERN.search(parsed.path)
    if match:
        return f"{base}/dp/{match.group(1)}"

    match = _GP_PATTERN.search(parsed.path)
    if match:
        return f"{base}/gp/product/{match.group(1)}"

    return f"{base}{parsed.path}"


def build_product_url(product_id: str, zip_code: Optional[str]) -> str:
    """Synthesize a canonical product URL from a bare product ID.

    A six-digit code is an Indian PIN code, so the product is looked up on
    Amazon.in; everything else goes to Amazon.com.
    """
    domain = INDIA_MARKETPLACE if zip_code and len(zip_code) == 6 else US_MARKETPLACE
    return f"https://www.{domain}/dp/{product_id}"


def currency_for_url(url: str) -> str:
    """Return the currency symbol for a product URL, decided by hostname only."""
    try:
        host = urlparse(url).hostname or ""
    except ValueError:
        host = ""
    return CURRENCY_INR if INDIA_MARKETPLACE in host else CURRENCY_USD


def clean_price_text(raw: Optional[str]) -> str:
    """Strip everything but digits, commas and periods from a price string.

    "₹1,299.00" -> "1,299.00", "$ 24.99 " -> "24.99"
    """
    if not raw:
        return ""
    return _PRICE_NOISE.sub("", raw.strip())


def truncate_description(text: Optional[str], limit: int = DESCRIPTION_LIMIT) -> str:
    """Cut ``text`` to ``limit`` characters, appending "..." if anything was dropped."""
    if not text:
        return ""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def validate_zip_code(zip_code: Optional[str]) -> str:
    """Validate a US ZIP (5 digits) or Indian PIN (6 digits) code.

    Raises:
        MissingLocale: If no code was supplied
        InvalidRequestBody: If the code is not 5 or 6 digits
    """
    if not zip_code or not zip_code.strip():
        raise MissingLocale()

    zip_code = zip_code.strip()
    if not _ZIP_CODE_PATTERN.match(zip_code):
        raise InvalidRequestBody(
            "Please enter a valid 6-digit Indian PIN code or 5-digit US ZIP code"
        )
    return zip_code


def validate_product_id(product_id: str) -> str:
    """Validate a bare product identifier (ASIN).

    Raises:
        InvalidRequestBody: If the ID is not 10 alphanumeric characters
    """
    product_id = product_id.strip()
    if not _PRODUCT_ID_PATTERN.match(product_id):
        raise InvalidRequestBody("productId must be a 10-character alphanumeric product ID")
    return product_id
