"""Price tracking endpoints.

``POST /track-price`` is the only functional route; the GET variants just
explain how to call it.
"""

from typing import List

import structlog
from fastapi import APIRouter, Depends

from pricewatch.core.exceptions import InternalError, PriceWatchException
from pricewatch.dependencies import get_client_id, get_tracker_service
from pricewatch.schemas import (
    EndpointInfoResponse,
    MessageResponse,
    ProductResponse,
    TrackPriceRequest,
)
from pricewatch.services.tracker_service import PriceTrackerService

router = APIRouter()
logger = structlog.get_logger(__name__)

USAGE_MESSAGE = "This endpoint requires a POST request with a product URL and ZIP code"


@router.post(
    "",
    response_model=ProductResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": MessageResponse},
        429: {"model": MessageResponse},
        500: {"model": MessageResponse},
    },
)
async def track_price(
    body: TrackPriceRequest,
    client_id: str = Depends(get_client_id),
    tracker: PriceTrackerService = Depends(get_tracker_service),
):
    """Fetch the current price and details of one Amazon product.

    Body: ``{productUrl?, productId?, zipCode}`` with exactly one of
    productUrl / productId.

    Returns 400 for invalid input, 429 when the caller is rate limited and
    500 when the page could not be fetched or parsed.
    """
    logger.info(
        "track_price_requested",
        client_id=client_id,
        product_url=body.product_url,
        product_id=body.product_id,
        zip_code=body.zip_code,
    )
    try:
        record = await tracker.track(body, client_id)
    except PriceWatchException:
        raise
    except Exception as e:
        logger.error("track_price_failed", error=str(e), exc_info=True)
        raise InternalError(str(e) or "An unexpected error occurred") from e

    return ProductResponse.model_validate(record.to_response())


@router.get("", response_model=EndpointInfoResponse)
async def track_price_info():
    """Explain how to use the tracking endpoint."""
    return EndpointInfoResponse(message=USAGE_MESSAGE)


@router.get("/{product_path:path}", response_model=EndpointInfoResponse)
async def track_price_path_info(product_path: str):
    """Same as ``GET /track-price``; echoes the path segments."""
    params: List[str] = [p for p in product_path.split("/") if p]
    return EndpointInfoResponse(message=USAGE_MESSAGE, params=params)
