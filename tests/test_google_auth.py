"""Tests for calendar_mcp.services.google_auth."""

import dataclasses
from unittest.mock import patch

import pytest

from calendar_mcp.domain.errors import ConfigurationError
from calendar_mcp.services.google_auth import CALENDAR_SCOPES, GoogleAuth

REQUIRED = [
    ("calendar_client_id", "CALENDAR_CLIENT_ID"),
    ("calendar_client_secret", "CALENDAR_CLIENT_SECRET"),
    ("calendar_redirect_uri", "CALENDAR_REDIRECT_URI"),
    ("calendar_refresh_token", "CALENDAR_REFRESH_TOKEN"),
]


class TestGoogleAuth:
    """Tests for GoogleAuth."""

    def test_creds_carry_refresh_token(self, settings):
        """Credentials hold the refresh token and no access token yet."""
        creds = GoogleAuth(settings).creds()
        assert creds.token is None
        assert creds.refresh_token == "refresh-token"
        assert creds.client_id == "client-id"
        assert creds.client_secret == "client-secret"
        assert creds.token_uri == settings.google_token_uri

    def test_calendar_builds_v3_service(self, settings):
        """calendar() builds the v3 resource over the refresh-token credentials."""
        with patch("calendar_mcp.services.google_auth.build") as build:
            handle = GoogleAuth(settings).calendar()

        assert handle is build.return_value
        args, kwargs = build.call_args
        assert args == ("calendar", "v3")
        assert kwargs["credentials"].refresh_token == "refresh-token"
        assert kwargs["static_discovery"] is True

    def test_default_scopes(self, settings):
        """Calendar scope is requested by default."""
        assert GoogleAuth(settings).scopes == CALENDAR_SCOPES

    @pytest.mark.parametrize("field,env", REQUIRED)
    def test_missing_value_fails_before_network(self, settings, field, env):
        """Any one missing credential raises ConfigurationError and nothing is built."""
        incomplete = dataclasses.replace(settings, **{field: ""})
        with patch("calendar_mcp.services.google_auth.build") as build:
            with pytest.raises(ConfigurationError) as exc:
                GoogleAuth(incomplete).calendar()

        assert env in str(exc.value)
        build.assert_not_called()

    def test_all_missing_are_listed(self, settings):
        """The error names every missing variable."""
        empty = dataclasses.replace(settings, calendar_client_id="", calendar_refresh_token="")
        with pytest.raises(ConfigurationError) as exc:
            GoogleAuth(empty).check()
        assert "CALENDAR_CLIENT_ID" in str(exc.value)
        assert "CALENDAR_REFRESH_TOKEN" in str(exc.value)
