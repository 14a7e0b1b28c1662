from datetime import timezone
from typing import Any, Dict, List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, field_validator
from dateutil import parser as dtparse

# [longitude, latitude]; numbers only, no "8.6" or true
Coordinates = Tuple[StrictFloat, StrictFloat]


def to_rfc3339(value: str) -> str:
    """
    Parse a loose date/date-time string into an RFC 3339 UTC timestamp.
    Naive values are taken as UTC. "2024-01-01" -> "2024-01-01T00:00:00.000Z".
    Raises ValueError when the string is not a date.
    """
    try:
        dt = dtparse.isoparse(value)
    except ValueError:
        dt = dtparse.parse(value)
    dt = dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ToolParams(BaseModel):
    """Base for tool parameter records. Wire names are the camelCase aliases."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


### --- calendar tools --- ###

class GetEventsParams(ToolParams):
    start_date: str = Field(..., alias="startDate", description="Events that start after or on this date")
    end_date: str = Field(..., alias="endDate", description="Events that start before this date")

    @field_validator("start_date", "end_date")
    @classmethod
    def _as_rfc3339(cls, v: str) -> str:
        try:
            return to_rfc3339(v)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"not a date: {v!r}") from e


class GetEventParams(ToolParams):
    event_id: str = Field(..., alias="eventId", description="Event ID")


class AddEventParams(ToolParams):
    title: str = Field(..., description="Event title")
    start: str = Field(..., description="Event start date and time")
    end: str = Field(..., description="Event end date and time")
    location: Optional[str] = Field(None, description="Geographic location of the event as free-form text")


class UpdateEventParams(ToolParams):
    title: Optional[str] = Field(None, description="Event title")
    start: Optional[str] = Field(None, description="Event start date and time")
    end: Optional[str] = Field(None, description="Event end date and time")
    event_id: str = Field(..., alias="eventId", description="Event ID")
    location: Optional[str] = Field(None, description="Geographic location of the event as free-form text")


class DeleteEventParams(ToolParams):
    event_id: str = Field(..., alias="eventId", description="Event ID")


### --- routing tools --- ###

class DistanceParams(ToolParams):
    point1_coordinates: Coordinates = Field(
        ..., alias="point1Coordinates", description="Coordinates of first point [longitude, latitude]")
    point2_coordinates: Coordinates = Field(
        ..., alias="point2Coordinates", description="Coordinates of second point [longitude, latitude]")


class CoordinatesParams(ToolParams):
    place: str = Field(..., description="Name of the place to get coordinates for")


### --- results --- ###

class EventRecord(BaseModel):
    """Minimal view of a calendar event."""
    summary: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None

    @classmethod
    def from_api(cls, event: Dict[str, Any]) -> "EventRecord":
        """Reshape an upstream event; timed events win over all-day ones (dateTime ?? date)."""
        def when(key: str) -> Optional[str]:
            v = event.get(key) or {}
            return v.get("dateTime") or v.get("date")
        return cls(summary=event.get("summary"), start=when("start"), end=when("end"))


class ContentBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolInvocation(BaseModel):
    """One incoming tool call."""
    tool_name: str
    arguments: Dict[str, Any] = {}


class ToolResult(BaseModel):
    """Uniform envelope returned for every invocation."""
    is_error: bool = False
    content: List[ContentBlock]

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(is_error=False, content=[ContentBlock(text=text)])

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(is_error=True, content=[ContentBlock(text=text)])

    @property
    def text(self) -> str:
        return "\n".join(c.text for c in self.content)
