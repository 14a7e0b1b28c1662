from __future__ import annotations
from dataclasses import dataclass
import os
from typing import Mapping, Optional
from dotenv import find_dotenv, load_dotenv
from calendar_mcp.domain.errors import ConfigurationError

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _env(env: Mapping[str, str], *names: str, default: str = "") -> str:
    """Return the first non-empty value among `names`, else `default`."""
    for name in names:
        value = (env.get(name) or "").strip()
        if value:
            return value
    return default


def _number(env: Mapping[str, str], name: str, kind: type, default: float):
    raw = _env(env, name, default=str(default))
    try:
        value = kind(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a {kind.__name__}, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _log_level(env: Mapping[str, str], default: str) -> str:
    level = _env(env, "LOG_LEVEL", default=default).upper()
    level = _LEVEL_ALIASES.get(level, level)
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


# carries .env tokens, if dont exist uses fallbacks.
@dataclass(frozen=True)
class Settings:
    calendar_client_id: str = ""
    calendar_client_secret: str = ""
    calendar_redirect_uri: str = ""
    calendar_refresh_token: str = ""
    calendar_id: str = "primary"
    calendar_max_results: int = 5
    google_token_uri: str = "https://oauth2.googleapis.com/token"
    routing_api_key: str = ""
    routing_base_url: str = "https://api.openrouteservice.org"
    routing_profile: str = "driving-car"
    http_timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from a mapping of environment variables.
        Inputs:
            env: mapping to read from (defaults to os.environ).
        Raises:
            ConfigurationError: a numeric value or LOG_LEVEL does not parse.
        Returns:
            Settings with every field resolved. The original Google/openrouteservice
            variable names are accepted as fallbacks.
        """
        env = os.environ if env is None else env
        return cls(
            calendar_client_id=_env(env, "CALENDAR_CLIENT_ID", "GOOGLE_CLIENT_ID"),
            calendar_client_secret=_env(env, "CALENDAR_CLIENT_SECRET", "GOOGLE_CLIENT_SECRET"),
            calendar_redirect_uri=_env(env, "CALENDAR_REDIRECT_URI", "GOOGLE_REDIRECT_URI"),
            calendar_refresh_token=_env(env, "CALENDAR_REFRESH_TOKEN", "GOOGLE_REFRESH_TOKEN"),
            calendar_id=_env(env, "CALENDAR_ID", default=cls.calendar_id),
            calendar_max_results=_number(env, "CALENDAR_MAX_RESULTS", int, cls.calendar_max_results),
            routing_api_key=_env(env, "ROUTING_API_KEY", "OPENROUTESERVICE_API_KEY"),
            routing_base_url=_env(env, "ROUTING_BASE_URL", default=cls.routing_base_url),
            routing_profile=_env(env, "ROUTING_PROFILE", default=cls.routing_profile),
            http_timeout=_number(env, "HTTP_TIMEOUT", float, cls.http_timeout),
            log_level=_log_level(env, cls.log_level),
        )


def load_settings() -> Settings:
    """Load .env from the working directory (if any), then read the environment once."""
    load_dotenv(find_dotenv(usecwd=True))
    return Settings.from_env()
