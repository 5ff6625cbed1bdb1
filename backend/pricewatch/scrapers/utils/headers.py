"""Browser-like request headers for product page fetches."""

from typing import Dict, Optional

from pricewatch.config import settings


ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


def build_browser_headers(
    user_agent: Optional[str] = None,
    accept_language: Optional[str] = None,
    referer: Optional[str] = None,
) -> Dict[str, str]:
    """Build the header set sent with every product page request.

    Cache-busting headers are always included so intermediaries never
    serve a stale product page.

    Args:
        user_agent: Overrides SCRAPER_USER_AGENT
        accept_language: Overrides SCRAPER_ACCEPT_LANGUAGE
        referer: Overrides SCRAPER_REFERER

    Returns:
        Header dict suitable for httpx
    """
    return {
        "User-Agent": user_agent or settings.SCRAPER_USER_AGENT,
        "Accept": ACCEPT_HTML,
        "Accept-Language": accept_language or settings.SCRAPER_ACCEPT_LANGUAGE,
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Referer": referer or settings.SCRAPER_REFERER,
    }
