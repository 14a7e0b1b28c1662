from __future__ import annotations
import logging
from typing import List, Sequence
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from calendar_mcp.config import Settings
from calendar_mcp.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Google API scopes needed for this project (Calendar read/write)
CALENDAR_SCOPES: List[str] = [
    "https://www.googleapis.com/auth/calendar",
]

# settings field -> environment variable, for error messages
_REQUIRED = (
    ("calendar_client_id", "CALENDAR_CLIENT_ID"),
    ("calendar_client_secret", "CALENDAR_CLIENT_SECRET"),
    ("calendar_redirect_uri", "CALENDAR_REDIRECT_URI"),
    ("calendar_refresh_token", "CALENDAR_REFRESH_TOKEN"),
)


class GoogleAuth:
    def __init__(self, settings: Settings, scopes: Sequence[str] = CALENDAR_SCOPES):
        """
        Initialize the GoogleAuth helper.
        Inputs:
            settings: resolved configuration holding the OAuth client + refresh token.
            scopes: list of Google API scope URLs.
        """
        self.scopes = list(scopes)
        self._settings = settings

    def check(self) -> None:
        """Raise ConfigurationError if any credential value is missing."""
        missing = [env for field, env in _REQUIRED if not getattr(self._settings, field)]
        if missing:
            raise ConfigurationError(f"Missing Google API credentials: {', '.join(missing)}")

    def creds(self) -> Credentials:
        """
        Build OAuth2 credentials from the configured refresh token.
        - No access token is held; google-auth refreshes it on the first request.
        - Fails fast with ConfigurationError before any network call.
        Returns:
            google.oauth2.credentials.Credentials object.
        """
        self.check()
        s = self._settings
        return Credentials(
            token=None,
            refresh_token=s.calendar_refresh_token,
            client_id=s.calendar_client_id,
            client_secret=s.calendar_client_secret,
            token_uri=s.google_token_uri,
            scopes=self.scopes,
        )

    def calendar(self):
        """
        Build a Calendar v3 service object (the opaque client handle).
        Uses the discovery document bundled with googleapiclient, so nothing goes over the wire here.
        """
        creds = self.creds()
        logger.debug("building calendar v3 client")
        return build("calendar", "v3", credentials=creds, cache_discovery=False, static_discovery=True)
