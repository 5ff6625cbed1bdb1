"""Time source shared by the in-memory stores and the scraper.

Stores take a ``clock`` callable instead of reading the time directly so
tests can drive expiry without sleeping.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
