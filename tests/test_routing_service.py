"""Tests for calendar_mcp.services.routing_service."""

import dataclasses
import json

import httpx
import pytest

from calendar_mcp.domain.errors import ConfigurationError, EmptyResultError, UpstreamError
from calendar_mcp.services.routing_service import RoutingClient


@pytest.mark.asyncio
class TestRouteSummary:
    """Tests for RoutingClient.route_summary."""

    async def test_posts_coordinates_with_key(self, routing_client, ors_requests, ors_responses):
        """Directions are requested with both points and the API key header."""
        ors_responses.append((200, {"routes": [{"summary": {"distance": 1234.5, "duration": 90.0}}]}))

        summary = await routing_client.route_summary((8.681495, 49.41461), (8.687872, 49.420318))

        assert summary == {"distance": 1234.5, "duration": 90.0}
        request = ors_requests[0]
        assert request.method == "POST"
        assert request.url == "https://api.openrouteservice.org/v2/directions/driving-car"
        assert request.headers["Authorization"] == "ors-key"
        assert json.loads(request.content) == {"coordinates": [[8.681495, 49.41461], [8.687872, 49.420318]]}

    async def test_no_routes(self, routing_client, ors_responses):
        """An empty routes list is an EmptyResultError."""
        ors_responses.append((200, {"routes": []}))
        with pytest.raises(EmptyResultError):
            await routing_client.route_summary((0, 0), (1, 1))

    async def test_empty_summary_counts_as_zero(self, routing_client, ors_responses):
        """Zero-length routes have no distance/duration keys."""
        ors_responses.append((200, {"routes": [{"summary": {}}]}))
        assert await routing_client.route_summary((0, 0), (0, 0)) == {"distance": 0.0, "duration": 0.0}

    async def test_http_error_carries_body(self, routing_client, ors_responses):
        """4xx/5xx responses raise UpstreamError with status and body."""
        ors_responses.append((403, {"error": "Access to this API has been disallowed"}))
        with pytest.raises(UpstreamError) as exc:
            await routing_client.route_summary((0, 0), (1, 1))
        assert exc.value.status == 403
        assert "disallowed" in str(exc.value)

    async def test_missing_key_fails_before_request(self, settings, ors_requests):
        """No API key means ConfigurationError and no request."""
        client = RoutingClient(dataclasses.replace(settings, routing_api_key=""),
                               transport=httpx.MockTransport(lambda r: ors_requests.append(r)))
        with pytest.raises(ConfigurationError):
            await client.route_summary((0, 0), (1, 1))
        assert ors_requests == []

    async def test_connection_error(self, settings):
        """Transport failures become UpstreamError."""

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = RoutingClient(settings, transport=httpx.MockTransport(refuse))
        with pytest.raises(UpstreamError) as exc:
            await client.route_summary((0, 0), (1, 1))
        assert "connection refused" in str(exc.value)


@pytest.mark.asyncio
class TestGeocode:
    """Tests for RoutingClient.geocode."""

    async def test_query_params(self, routing_client, ors_requests, ors_responses):
        """Geocoding sends api_key and text as query parameters."""
        ors_responses.append((200, {"features": [{"geometry": {"coordinates": [13.38886, 52.517037]}}]}))

        coords = await routing_client.geocode("Berlin")

        assert coords == [13.38886, 52.517037]
        request = ors_requests[0]
        assert request.method == "GET"
        assert request.url.path == "/geocode/search"
        assert request.url.params["api_key"] == "ors-key"
        assert request.url.params["text"] == "Berlin"

    async def test_first_feature_wins(self, routing_client, ors_responses):
        """Only the first feature is used."""
        ors_responses.append((200, {"features": [
            {"geometry": {"coordinates": [1.0, 2.0]}},
            {"geometry": {"coordinates": [3.0, 4.0]}},
        ]}))
        assert await routing_client.geocode("Springfield") == [1.0, 2.0]

    async def test_no_features(self, routing_client, ors_responses):
        """Zero features is an EmptyResultError naming the place."""
        ors_responses.append((200, {"type": "FeatureCollection", "features": []}))
        with pytest.raises(EmptyResultError) as exc:
            await routing_client.geocode("Nowhereville")
        assert "Nowhereville" in str(exc.value)
