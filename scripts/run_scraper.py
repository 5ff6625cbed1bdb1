"""Manual product lookup for testing and debugging the Amazon scraper.

Fetches one product page directly (no cache, no rate limiting) and prints
what the extractor pulled out of it.

Usage:
    python scripts/run_scraper.py --url "https://www.amazon.com/dp/B0ABCDEFGH"
    python scripts/run_scraper.py --product-id B0ABCDEFGH --zip 201301
    python scripts/run_scraper.py --product-id B0ABCDEFGH --zip 10001 --json
"""

import asyncio
import argparse
import json
import sys
import os

# Add backend to path so we can import pricewatch modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from pricewatch.config import settings
from pricewatch.core.exceptions import PriceWatchException
from pricewatch.schemas import TrackPriceRequest
from pricewatch.scrapers.amazon import AmazonProductScraper
from pricewatch.services.cache_service import ProductCache
from pricewatch.services.description_service import DescriptionGenerator
from pricewatch.services.rate_limiter import ClientRateLimiter
from pricewatch.services.tracker_service import PriceTrackerService


async def run_lookup(request: TrackPriceRequest, as_json: bool = False) -> int:
    """Look up one product and display the result.

    Args:
        request: Product URL or ID plus ZIP code
        as_json: Print the API response body instead of a summary

    Returns:
        Process exit code
    """
    tracker = PriceTrackerService(
        scraper=AmazonProductScraper(timeout=settings.SCRAPER_TIMEOUT_SECONDS),
        cache=ProductCache(ttl_seconds=settings.CACHE_TTL_SECONDS),
        rate_limiter=ClientRateLimiter(),
        describer=DescriptionGenerator(),
    )

    try:
        url, zip_code = tracker.resolve_product_url(request)
        print(f"\n🔍 Fetching {url} (ZIP {zip_code})...\n")

        record = await tracker.track(request, client_id="cli")

        if as_json:
            print(json.dumps(record.to_response(), default=str, ensure_ascii=False, indent=2))
            return 0

        print(f"{'='*70}")
        print(f"  {record.name}")
        print(f"{'='*70}")
        print(f"  💰 Price: {record.currency}{record.price}")
        if record.image_url:
            print(f"  🖼️  Image: {record.image_url}")
        if record.description:
            print(f"  📝 Description: {record.description}")
        print(f"  💬 Overview: {record.overview}")
        print(f"  🕒 Fetched at: {record.timestamp.isoformat()}")
        print(f"{'='*70}\n")
        return 0

    except PriceWatchException as e:
        print(f"\n❌ {type(e).__name__} ({e.status_code}): {e.message}\n")
        return 1

    finally:
        await tracker.close()


def main():
    """Parse arguments and run the lookup."""
    parser = argparse.ArgumentParser(
        description="Fetch a single Amazon product page and show the extracted fields",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_scraper.py --url "https://www.amazon.com/dp/B0ABCDEFGH" --zip 10001
  python scripts/run_scraper.py --product-id B0ABCDEFGH --zip 201301
        """,
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--url", help="Amazon.com or Amazon.in product URL")
    target.add_argument("--product-id", help="10-character product ID (ASIN)")

    parser.add_argument(
        "--zip",
        required=True,
        help="5-digit US ZIP code or 6-digit Indian PIN code",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the API response body as JSON",
    )

    args = parser.parse_args()

    request = TrackPriceRequest(productUrl=args.url, productId=args.product_id, zipCode=args.zip)
    sys.exit(asyncio.run(run_lookup(request, as_json=args.json)))


if __name__ == "__main__":
    main()
