"""Cache-aside gateway in front of the Marketcheck listings search.

validate -> cache read -> upstream call -> cache write -> respond.
Only non-empty results are cached, so a transient "no results" answer is
never served from cache.
"""

import json
import logging
from dataclasses import dataclass

import httpx

from config import Settings
from errors import ConfigurationError, ValidationError
from services.cache import TTLCache
from services.marketcheck import search_active_listings

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 50
DEFAULT_ROWS = 10
REQUIRED_FIELDS = ("make", "model", "year", "zip")


@dataclass(frozen=True)
class SearchQuery:
    make: str | None
    model: str | None
    year: str | None
    zip: str | None
    radius: int = DEFAULT_RADIUS
    rows: int = DEFAULT_ROWS

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def cache_key(self) -> str:
        """Deterministic key over make, model, year, zip and radius.

        ``rows`` is not part of the key, so a cached page is reused for any
        requested row count.
        """
        params = {
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "zip": self.zip,
            "radius": self.radius,
        }
        return f"search-{json.dumps(params, separators=(',', ':'))}"

    def upstream_params(self) -> dict:
        return {
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "zip": self.zip,
            "radius": self.radius,
            "rows": self.rows,
        }


class VehicleSearchGateway:
    def __init__(
        self,
        settings: Settings,
        cache: TTLCache,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.cache = cache
        self._transport = transport

    async def lookup(self, query: SearchQuery) -> dict:
        """Return listings for ``query``, from cache when a live entry exists."""
        missing = query.missing_fields()
        if missing:
            raise ValidationError(missing)

        key = query.cache_key()
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for: %s", key)
            return {**cached, "cached": True}

        api_key = self.settings.marketcheck_api_key
        if not api_key:
            raise ConfigurationError(
                "Marketcheck API key not configured",
                "Please set the MARKETCHECK_API_KEY environment variable",
            )

        logger.info(
            "Fetching from Marketcheck API: %s %s %s near %s",
            query.year, query.make, query.model, query.zip,
        )
        data = await search_active_listings(
            self.settings.marketcheck_base_url,
            api_key,
            query.upstream_params(),
            transport=self._transport,
        )

        listings = data.get("listings") if isinstance(data, dict) else None
        if not isinstance(listings, list) or not listings:
            logger.info("No listings found for: %s", key)
            return {
                "listings": [],
                "num_found": 0,
                "count": 0,
                "message": "No listings found for this vehicle",
            }

        self.cache.set(key, data)
        return data
