"""Pydantic schemas for the HTTP API."""

from pricewatch.schemas.health import HealthCheckResponse
from pricewatch.schemas.track_price import (
    EchoResponse,
    EndpointInfoResponse,
    MessageResponse,
    ProductResponse,
    TrackPriceRequest,
)

__all__ = [
    "HealthCheckResponse",
    "EchoResponse",
    "EndpointInfoResponse",
    "MessageResponse",
    "ProductResponse",
    "TrackPriceRequest",
]
