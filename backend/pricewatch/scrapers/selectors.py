"""Ordered selector candidates for Amazon product pages.

Amazon serves several page templates, so each field is described by a list
of candidates tried in order, most specific (or legacy) layout first. A
candidate is a plain ``(soup) -> Optional[str]`` function; the first one
returning a non-empty string wins.
"""

from typing import Callable, List, Optional, Sequence

from bs4 import BeautifulSoup

from pricewatch.scrapers.utils.normalizer import clean_price_text

Candidate = Callable[[BeautifulSoup], Optional[str]]


def text_of(selector: str) -> Candidate:
    """Candidate returning the stripped text of every element matching ``selector``."""

    def candidate(soup: BeautifulSoup) -> Optional[str]:
        text = "".join(el.get_text() for el in soup.select(selector)).strip()
        return text or None

    candidate.__name__ = f"text_of({selector!r})"
    return candidate


def first_text_of(selector: str) -> Candidate:
    """Candidate returning the stripped text of the first match only."""

    def candidate(soup: BeautifulSoup) -> Optional[str]:
        el = soup.select_one(selector)
        if el is None:
            return None
        return el.get_text().strip() or None

    candidate.__name__ = f"first_text_of({selector!r})"
    return candidate


def price_of(selector: str) -> Candidate:
    """Candidate returning the cleaned price text of the first match."""
    read = first_text_of(selector)

    def candidate(soup: BeautifulSoup) -> Optional[str]:
        return clean_price_text(read(soup)) or None

    candidate.__name__ = f"price_of({selector!r})"
    return candidate


def attr_of(selector: str, attr: str) -> Candidate:
    """Candidate returning ``attr`` of the first element matching ``selector``."""

    def candidate(soup: BeautifulSoup) -> Optional[str]:
        el = soup.select_one(selector)
        if el is None:
            return None
        value = el.get(attr)
        return value.strip() if isinstance(value, str) and value.strip() else None

    candidate.__name__ = f"attr_of({selector!r}, {attr!r})"
    return candidate


def first_match(soup: BeautifulSoup, candidates: Sequence[Candidate]) -> Optional[str]:
    """Evaluate ``candidates`` in order and return the first non-empty result."""
    for candidate in candidates:
        value = candidate(soup)
        if value:
            return value
    return None


NAME_CANDIDATES: List[Candidate] = [
    text_of("span#productTitle"),
    text_of("h1.product-title-word-break"),
]

PRICE_CANDIDATES: List[Candidate] = [
    price_of("span.a-price-whole"),
    price_of("span#priceblock_ourprice"),
    price_of("span#priceblock_dealprice"),
    price_of("span.a-price .a-offscreen"),
    price_of("span.a-price"),
    price_of(".a-price .a-offscreen"),
    price_of("#corePrice_feature_div .a-price .a-offscreen"),
]

IMAGE_CANDIDATES: List[Candidate] = [
    attr_of("#landingImage", "src"),
    attr_of("#imgBlkFront", "src"),
    attr_of("img#main-image", "src"),
    attr_of(".a-dynamic-image", "src"),
]

DESCRIPTION_CANDIDATES: List[Candidate] = [
    text_of("#productDescription p"),
    text_of("#feature-bullets .a-list-item"),
]
