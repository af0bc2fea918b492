"""Health check route."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api")


@router.get("/health")
async def health(request: Request) -> dict:
    """Lightweight health check — no external calls."""
    gateway = request.app.state.gateway
    return {
        "status": "ok",
        "service": "vehicle-price-finder",
        "commit": gateway.settings.git_sha,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "cache_size": len(gateway.cache),
        "api_key_configured": gateway.settings.api_key_configured,
    }
