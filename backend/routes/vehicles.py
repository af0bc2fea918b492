"""Vehicle search route, a cached proxy to Marketcheck active listings."""

import logging

from fastapi import APIRouter, Query, Request

from errors import UnexpectedError, VehicleSearchError
from services.vehicle_search import DEFAULT_RADIUS, DEFAULT_ROWS, SearchQuery, VehicleSearchGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_gateway(request: Request) -> VehicleSearchGateway:
    return request.app.state.gateway


@router.get("/vehicles/search")
async def search_vehicles(
    request: Request,
    make: str | None = Query(None),
    model: str | None = Query(None),
    year: str | None = Query(None),
    zip: str | None = Query(None),
    radius: int = Query(DEFAULT_RADIUS),
    rows: int = Query(DEFAULT_ROWS),
) -> dict:
    """Search active listings for a make/model/year near a ZIP code."""
    query = SearchQuery(make=make, model=model, year=year, zip=zip, radius=radius, rows=rows)
    try:
        return await get_gateway(request).lookup(query)
    except VehicleSearchError:
        raise
    except Exception as e:
        # Handled inside the app so middleware headers still apply.
        logger.exception("Error in /api/vehicles/search")
        raise UnexpectedError(str(e)) from e
