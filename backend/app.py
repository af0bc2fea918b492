"""FastAPI application entry point for the vehicle price finder API."""

import logging
import sys
import time
from typing import Callable

import httpx
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, settings
from errors import RateLimitExceededError, register_error_handlers
from services.cache import TTLCache
from services.rate_limit import FixedWindowRateLimiter
from services.vehicle_search import VehicleSearchGateway

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)

# Origins the service is meant to serve once allow-all is switched off.
ALLOWED_ORIGINS = ["http://localhost:3000", "https://claude.ai"]
ALLOWED_ORIGIN_REGEX = r".*\.claude\.ai"


def create_app(
    app_settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], float] = time.time,
) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(title="Vehicle Price Finder API", version="1.0.0")

    app.state.gateway = VehicleSearchGateway(
        app_settings,
        TTLCache(ttl_seconds=app_settings.cache_ttl_seconds, clock=clock),
        transport=transport,
    )
    app.state.rate_limiter = FixedWindowRateLimiter(
        app_settings.rate_limit_max,
        app_settings.rate_limit_window_seconds,
        clock=clock,
    )

    # Rate limiting for /api/ routes
    @app.middleware("http")
    async def enforce_rate_limit(request: Request, call_next):
        if not request.url.path.startswith("/api/"):
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        result = app.state.rate_limiter.hit(client_id)
        if result.allowed:
            response: Response = await call_next(request)
        else:
            logger.warning("Rate limit exceeded for %s on %s", client_id, request.url.path)
            exc = RateLimitExceededError(result.reset_in_seconds)
            response = JSONResponse(exc.to_dict(), status_code=exc.status_code)
            response.headers["Retry-After"] = str(exc.retry_after)

        response.headers["X-RateLimit-Limit"] = str(result.limit)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        response.headers["X-RateLimit-Reset"] = str(result.reset_in_seconds)
        return response

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # CORS. Allow-all is a known relaxation of the allow-list below.
    if app_settings.cors_allow_all:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_origin_regex=ALLOWED_ORIGIN_REGEX,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.vehicles import router as vehicles_router

    app.include_router(health_router)
    app.include_router(vehicles_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = app_settings.validate()
        if missing:
            logger.warning("Missing env vars (vehicle search will fail): %s", ", ".join(missing))
        logger.info(
            "Vehicle Price Finder API on port %d (environment: %s, Marketcheck API: %s)",
            app_settings.port,
            app_settings.environment,
            "configured" if app_settings.api_key_configured else "not configured",
        )
        logger.info("Endpoints: GET /api/health, GET /api/vehicles/search")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
