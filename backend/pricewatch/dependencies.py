"""FastAPI dependency injection providers."""

from fastapi import Request

from pricewatch.services.tracker_service import PriceTrackerService


def get_tracker_service(request: Request) -> PriceTrackerService:
    """Return the tracker service built during application startup.

    Usage:
        @router.post("/track-price")
        async def track(tracker: PriceTrackerService = Depends(get_tracker_service)):
            ...
    """
    return request.app.state.tracker


def get_client_id(request: Request) -> str:
    """Best-effort client IP for rate limiting.

    Prefers the first hop of X-Forwarded-For, then X-Real-IP, then the
    socket peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"
