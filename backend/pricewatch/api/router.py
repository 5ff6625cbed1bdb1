"""API router -- aggregates all endpoint routers."""

from fastapi import APIRouter

from pricewatch.api import health, track_price

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(track_price.router, prefix="/track-price", tags=["track-price"])
