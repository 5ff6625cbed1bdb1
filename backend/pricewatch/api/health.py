"""Health check and connectivity test endpoints."""

from fastapi import APIRouter, Depends, Request

from pricewatch.core.exceptions import InvalidRequestBody
from pricewatch.dependencies import get_tracker_service
from pricewatch.schemas import EchoResponse, HealthCheckResponse, MessageResponse
from pricewatch.services.tracker_service import PriceTrackerService

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(tracker: PriceTrackerService = Depends(get_tracker_service)):
    """Return service health status.

    Checks the in-memory product cache and rate limiter.
    """
    services = {}

    try:
        services["cache"] = "ok" if await tracker.cache.health_check() else "error"
    except Exception as e:
        services["cache"] = f"error: {str(e)}"

    try:
        services["rate_limiter"] = "ok" if await tracker.rate_limiter.health_check() else "error"
    except Exception as e:
        services["rate_limiter"] = f"error: {str(e)}"

    overall_status = "ok" if all(s == "ok" for s in services.values()) else "degraded"

    return HealthCheckResponse(status=overall_status, services=services)


@router.get("/test", response_model=MessageResponse)
async def test_get():
    return MessageResponse(message="API is working")


@router.post("/test", response_model=EchoResponse)
async def test_post(request: Request):
    """Echo the JSON body back."""
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequestBody(f"Error processing request: {e}")
    return EchoResponse(message="Received data successfully", receivedData=body)
