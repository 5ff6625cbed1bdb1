"""PriceWatch Backend -- FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pricewatch import __version__
from pricewatch.api.router import api_router
from pricewatch.config import settings
from pricewatch.core.exceptions import PriceWatchException
from pricewatch.scrapers.amazon import AmazonProductScraper
from pricewatch.scrapers.utils.headers import build_browser_headers
from pricewatch.services.cache_service import ProductCache
from pricewatch.services.description_service import DescriptionGenerator
from pricewatch.services.rate_limiter import ClientRateLimiter
from pricewatch.services.tracker_service import PriceTrackerService

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = structlog.get_logger(__name__)


def build_tracker_service() -> PriceTrackerService:
    """Construct the tracker service and its stores from settings."""
    scraper = AmazonProductScraper(
        timeout=settings.SCRAPER_TIMEOUT_SECONDS,
        headers=build_browser_headers(),
    )
    cache = ProductCache(ttl_seconds=settings.CACHE_TTL_SECONDS)
    rate_limiter = ClientRateLimiter(
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        block_seconds=settings.RATE_LIMIT_BLOCK_SECONDS,
    )
    return PriceTrackerService(
        scraper=scraper,
        cache=cache,
        rate_limiter=rate_limiter,
        describer=DescriptionGenerator(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    # Startup
    logger.info("starting_pricewatch", environment=settings.ENVIRONMENT, debug=settings.DEBUG)
    app.state.tracker = build_tracker_service()

    yield

    # Shutdown
    logger.info("shutting_down_pricewatch")
    try:
        await app.state.tracker.close()
    except Exception as e:
        logger.warning("tracker_close_failed", error=str(e))


app = FastAPI(
    title="PriceWatch API",
    description="Amazon product price lookup API",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PriceWatchException)
async def pricewatch_exception_handler(request: Request, exc: PriceWatchException):
    """Render every application error as ``{"message": ...}``."""
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    else:
        logger.info("request_rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map body validation errors to 400 instead of FastAPI's default 422."""
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        message = "Invalid JSON in request body"
    elif any(err.get("type") == "missing" and tuple(err.get("loc", ())) == ("body",) for err in errors):
        message = "Request body is required"
    else:
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        detail = " ".join(part for part in (field, first.get("msg", "")) if part)
        message = f"Invalid request body: {detail}" if detail else "Invalid request body"
    logger.info("request_body_invalid", path=request.url.path, error=message)
    return JSONResponse(status_code=400, content={"message": message})


# Register API router
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "PriceWatch API",
        "version": __version__,
        "description": "Amazon product price lookup",
        "docs": "/docs" if settings.DEBUG else None,
        "health": "/api/health",
    }
