"""Price tracking Pydantic schemas for request/response validation."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TrackPriceRequest(BaseModel):
    """Body of ``POST /api/track-price``.

    Exactly one of ``productUrl`` / ``productId`` must be given; that rule is
    enforced by the tracker service so it can answer with the same messages
    as every other validation failure.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_url: Optional[str] = Field(default=None, alias="productUrl")
    product_id: Optional[str] = Field(default=None, alias="productId")
    zip_code: Optional[str] = Field(default=None, alias="zipCode")


class ProductResponse(BaseModel):
    """Product lookup result."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    price: str
    currency: str
    timestamp: datetime
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    url: str
    description: Optional[str] = None
    overview: Optional[str] = None
    zip_code: str = Field(alias="zipCode")


class MessageResponse(BaseModel):
    """Error or informational response."""

    message: str


class EndpointInfoResponse(MessageResponse):
    """Response of the informational GET routes."""

    method: str = "GET"
    params: List[str] = []


class EchoResponse(MessageResponse):
    """Response of ``POST /api/test``."""

    received_data: Any = Field(default=None, alias="receivedData")
