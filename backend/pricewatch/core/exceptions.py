"""Custom exception classes for the application.

Every exception carries the HTTP status it surfaces as; the handler
registered in ``pricewatch.main`` turns it into ``{"message": ...}``.
"""

from typing import Optional


class PriceWatchException(Exception):
    """Base exception for all PriceWatch errors."""

    status_code: int = 500

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class InvalidRequestBody(PriceWatchException):
    """Raised when the request body is missing, malformed or inconsistent."""

    status_code = 400


class InvalidUrl(PriceWatchException):
    """Raised when a product URL cannot be parsed as an http(s) URL."""

    status_code = 400


class UnsupportedMarketplace(PriceWatchException):
    """Raised when a product URL points outside Amazon.in / Amazon.com."""

    status_code = 400

    def __init__(
        self, message: str = "Only Amazon.in and Amazon.com URLs are currently supported"
    ):
        super().__init__(message)


class MissingLocale(PriceWatchException):
    """Raised when the ZIP/PIN code is absent."""

    status_code = 400

    def __init__(self, message: str = "ZIP/PIN code is required"):
        super().__init__(message)


class RateLimited(PriceWatchException):
    """Raised when a client exceeded its quota or is currently blocked."""

    status_code = 429


class FetchFailed(PriceWatchException):
    """Raised when the product page could not be downloaded."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class ExtractionFailed(PriceWatchException):
    """Raised when a required field is missing from the product page."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Could not extract product {field}")


class InternalError(PriceWatchException):
    """Raised for unexpected failures inside the request pipeline."""
