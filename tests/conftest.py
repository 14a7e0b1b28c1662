"""Pytest configuration and shared fixtures."""

import json
import os
from unittest.mock import MagicMock

import httpx
import pytest

from calendar_mcp.api.dispatcher import Dispatcher
from calendar_mcp.api.tools import build_registry
from calendar_mcp.config import Settings
from calendar_mcp.services.calendar_service import CalendarClient
from calendar_mcp.services.routing_service import RoutingClient


@pytest.fixture
def settings():
    """Settings with every credential filled in."""
    return Settings(
        calendar_client_id="client-id",
        calendar_client_secret="client-secret",
        calendar_redirect_uri="http://localhost",
        calendar_refresh_token="refresh-token",
        routing_api_key="ors-key",
    )


@pytest.fixture
def calendar_service():
    """Stand-in for the googleapiclient Calendar resource."""
    return MagicMock(name="calendar_v3")


@pytest.fixture
def calendar_client(settings, calendar_service):
    """CalendarClient whose auth hands out the mocked service."""
    auth = MagicMock(name="GoogleAuth")
    auth.calendar.return_value = calendar_service
    return CalendarClient(auth, settings)


@pytest.fixture
def ors_requests():
    """Requests seen by the fake openrouteservice, in order."""
    return []


@pytest.fixture
def ors_responses():
    """Queue of (status, json_body) answers for the fake openrouteservice."""
    return []


@pytest.fixture
def routing_client(settings, ors_requests, ors_responses):
    """RoutingClient wired to an httpx.MockTransport."""

    def handler(request: httpx.Request) -> httpx.Response:
        ors_requests.append(request)
        status, body = ors_responses.pop(0)
        return httpx.Response(status, content=json.dumps(body).encode(), headers={"content-type": "application/json"})

    return RoutingClient(settings, transport=httpx.MockTransport(handler))


@pytest.fixture
def dispatcher(settings, calendar_client, routing_client):
    """Dispatcher over the real registry with fake upstreams."""
    return Dispatcher(build_registry(settings, cal=calendar_client, routing=routing_client))


@pytest.fixture(autouse=True)
def setup_env():
    """Restore os.environ after each test (load_dotenv writes into it)."""
    original_env = dict(os.environ)

    yield

    os.environ.clear()
    os.environ.update(original_env)
