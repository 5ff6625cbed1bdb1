"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

import httpx
import pytest


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def product_page(
    title: Optional[str] = "Acme Gaming Laptop 15.6 inch",
    price_html: str = '<span class="a-price-whole">1,299.</span>',
    image_html: str = '<img id="landingImage" src="https://m.media-amazon.com/images/I/acme.jpg">',
    description_html: str = '<div id="productDescription"><p>A fast laptop for gaming.</p></div>',
) -> str:
    """Render a minimal Amazon-like product page."""
    title_html = f'<span id="productTitle">  {title}  </span>' if title else ""
    return (
        "<html><head><title>Amazon</title></head><body>"
        f"{title_html}{price_html}{image_html}{description_html}"
        "</body></html>"
    )


def mock_http_client(
    routes: Dict[str, httpx.Response],
    calls: Optional[list] = None,
) -> httpx.AsyncClient:
    """AsyncClient whose responses come from ``routes`` keyed by URL.

    Unknown URLs get a 404. Every request is appended to ``calls``.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        response = routes.get(str(request.url))
        if response is None:
            return httpx.Response(404, text="not found")
        return response

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def page_factory() -> Callable[..., str]:
    return product_page


@pytest.fixture
def mock_client_factory() -> Callable[..., httpx.AsyncClient]:
    return mock_http_client
