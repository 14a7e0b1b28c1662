from typing import Optional, Sequence


class CalendarMCPError(Exception):
    """Base class for every error a tool call can report back to the caller."""


class ConfigurationError(CalendarMCPError):
    """Static configuration is missing or invalid."""


class ValidationError(CalendarMCPError):
    """Tool arguments do not match the declared parameters."""

    def __init__(self, message: str, fields: Sequence[str] = ()):
        super().__init__(message)
        self.fields = list(fields)


class NotFoundError(CalendarMCPError):
    """Unknown tool name or unknown upstream entity."""


class UpstreamError(CalendarMCPError):
    """The upstream API or the network failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class EmptyResultError(CalendarMCPError):
    """The upstream answered with zero results where one was expected."""
