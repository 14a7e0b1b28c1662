"""openrouteservice client for driving directions and place geocoding.

Every call opens its own ``httpx.AsyncClient`` and closes it on return; there
is no shared connection state between tool calls.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from calendar_mcp.config import Settings
from calendar_mcp.domain.errors import ConfigurationError, EmptyResultError, UpstreamError
from calendar_mcp.domain.schemas import Coordinates

logger = logging.getLogger(__name__)


class RoutingClient:
    """Async wrapper over the openrouteservice directions and geocode endpoints.

    Usage:
        client = RoutingClient(settings)
        summary = await client.route_summary((8.68, 49.41), (8.69, 49.42))
        lon_lat = await client.geocode("Heidelberg")
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.routing_base_url.rstrip("/")
        self.profile = settings.routing_profile
        self.timeout = settings.http_timeout
        self._api_key = settings.routing_api_key
        self._transport = transport

    def _key(self) -> str:
        if not self._api_key:
            raise ConfigurationError("Missing routing API key: ROUTING_API_KEY")
        return self._api_key

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._transport)

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Dict[str, Any]:
        """Send one request and return the decoded JSON body, raising UpstreamError on any failure."""
        try:
            async with self._client() as client:
                response = await client.request(method, endpoint, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            body = e.response.text[:500]
            logger.warning("openrouteservice %s %s: HTTP %s %s", method, endpoint, e.response.status_code, body)
            raise UpstreamError(f"HTTP {e.response.status_code}: {body}", status=e.response.status_code) from e
        except httpx.TimeoutException as e:
            logger.warning("openrouteservice %s %s timed out", method, endpoint)
            raise UpstreamError(f"Request timed out after {self.timeout}s") from e
        except httpx.RequestError as e:
            logger.warning("openrouteservice %s %s: %s", method, endpoint, e)
            raise UpstreamError(f"Request error: {e}") from e
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from openrouteservice: {e}") from e

    async def route_summary(self, origin: Coordinates, destination: Coordinates) -> Dict[str, float]:
        """Return the first route's summary: {"distance": meters, "duration": seconds}.

        Raises:
            EmptyResultError: no route between the two points.
        """
        data = await self._request(
            "POST",
            f"/v2/directions/{self.profile}",
            json={"coordinates": [list(origin), list(destination)]},
            headers={"Authorization": self._key(), "Content-Type": "application/json"},
        )
        routes: List[Dict[str, Any]] = data.get("routes") or []
        if not routes:
            raise EmptyResultError("No route found between the given coordinates")
        summary = routes[0].get("summary") or {}
        # zero-length routes come back with an empty summary
        return {"distance": float(summary.get("distance", 0)), "duration": float(summary.get("duration", 0))}

    async def geocode(self, place: str) -> List[float]:
        """Return [longitude, latitude] of the best match for `place`.

        Raises:
            EmptyResultError: nothing matched.
        """
        data = await self._request("GET", "/geocode/search", params={"api_key": self._key(), "text": place})
        features: List[Dict[str, Any]] = data.get("features") or []
        if not features:
            raise EmptyResultError(f"No coordinates found for place: {place}")
        return features[0]["geometry"]["coordinates"]
