# =============================================================================
# nps/client.py : Upstream Data Gateway for the NPS REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   One async function per NPS resource.  Each issues a single GET against
#   NPSConfig.base_url with the X-Api-Key header attached, passes the query
#   parameters through untouched, and returns the decoded JSON body:
#
#       {"total": "42", "limit": "10", "start": "0", "data": [...]}
#
# FAILURES:
#   Every failure is logged with whatever diagnostic context exists and then
#   RE-RAISED.  Turning failures into tool-level error payloads is the job of
#   tools/contracts.py, not this module.
#     - server answered non-2xx  → status, reason and body are logged
#                                  (429 gets its own rate-limit line)
#     - no response at all       → "No response received"
#     - 2xx with a non-JSON body → "Malformed response"
#     - anything else            → "Error setting up NPS API request"
#   There is no retry and no explicit timeout; httpx's default applies.
#
# CONNECTIONS:
#   Each call opens its own httpx.AsyncClient and closes it before returning.
#   Nothing is shared between invocations except the read-only NPSConfig.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from nps.config import NPSConfig

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-Api-Key"
_BODY_LOG_LIMIT = 500


def _log_failure(exc: Exception) -> None:
    """Log an upstream failure the way the NPS API reports it."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        if response.status_code == 429:
            logger.error("Rate limit exceeded for NPS API. Please try again later.")
        logger.error(
            "NPS API Error: status=%s statusText=%s data=%s",
            response.status_code,
            response.reason_phrase,
            response.text[:_BODY_LOG_LIMIT],
        )
    elif isinstance(exc, httpx.RequestError):
        logger.error("No response received from NPS API: %s", exc)
    elif isinstance(exc, ValueError):
        logger.error("Malformed response received from NPS API: %s", exc)
    else:
        logger.error("Error setting up NPS API request: %s", exc)


async def _get(
    config: NPSConfig,
    path: str,
    params: Mapping[str, Any] | None,
    what: str,
) -> dict[str, Any]:
    headers = {API_KEY_HEADER: config.api_key}
    try:
        async with httpx.AsyncClient(base_url=config.base_url, headers=headers) as client:
            response = await client.get(path, params=dict(params or {}))
            response.raise_for_status()
            return response.json()
    except Exception as exc:
        _log_failure(exc)
        logger.error("Error fetching %s", what)
        raise


# =============================================================================
# Resources wired to tools
# =============================================================================
async def get_parks(config: NPSConfig, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Search parks (GET /parks).

    Args:
        config: Base URL and API key.
        params: Query parameters forwarded as-is (stateCode, q, limit,
            start, activities, parkCode).
    """
    return await _get(config, "/parks", params, "parks data")


async def get_park_by_code(config: NPSConfig, park_code: str) -> dict[str, Any]:
    """Fetch a single park by its code (e.g. "yose"); asks for limit=1."""
    return await _get(
        config,
        "/parks",
        {"parkCode": park_code, "limit": 1},
        f"park with code {park_code}",
    )


async def get_alerts(config: NPSConfig, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Search alerts (GET /alerts) with parkCode, limit, start and q passed through."""
    return await _get(config, "/alerts", params, "alerts data")


# =============================================================================
# Resources not exposed as tools
# =============================================================================
async def get_alerts_by_park_code(config: NPSConfig, park_code: str) -> dict[str, Any]:
    return await _get(config, "/alerts", {"parkCode": park_code}, f"alerts for park {park_code}")


async def get_visitor_centers(
    config: NPSConfig, params: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    return await _get(config, "/visitorcenters", params, "visitor centers data")


async def get_campgrounds(config: NPSConfig, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    return await _get(config, "/campgrounds", params, "campgrounds data")


async def get_events(config: NPSConfig, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
    return await _get(config, "/events", params, "events data")


__all__ = [
    "API_KEY_HEADER",
    "get_parks",
    "get_park_by_code",
    "get_alerts",
    "get_alerts_by_park_code",
    "get_visitor_centers",
    "get_campgrounds",
    "get_events",
]
