"""Marketcheck active-listings client.

One GET per call, first page only (``start=0``). No retries: a non-success
status is raised as ``UpstreamError`` with the provider's body verbatim.
"""

import logging

import httpx

from errors import UnexpectedError, UpstreamError

logger = logging.getLogger(__name__)


async def search_active_listings(
    base_url: str,
    api_key: str,
    params: dict,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """Query Marketcheck for active listings matching ``params``.

    Args:
        base_url: Marketcheck search endpoint.
        api_key: Marketcheck API key.
        params: make, model, year, zip, radius, rows.
        transport: Optional httpx transport (tests pass a MockTransport).

    Returns:
        The decoded JSON body.
    """
    query = {"api_key": api_key, **params, "start": 0}

    try:
        async with httpx.AsyncClient(transport=transport, follow_redirects=True) as client:
            resp = await client.get(base_url, params=query, headers={"Accept": "application/json"})
    except httpx.HTTPError as e:
        logger.error("Marketcheck request failed: %s", e)
        raise UnexpectedError(str(e)) from e

    if not resp.is_success:
        logger.error("Marketcheck API error: %s %s", resp.status_code, resp.text)
        raise UpstreamError(resp.status_code, resp.text)

    try:
        return resp.json()
    except ValueError as e:
        logger.error("Marketcheck returned a non-JSON body: %s", e)
        raise UnexpectedError(f"Invalid JSON from Marketcheck: {e}") from e
