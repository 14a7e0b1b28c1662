### --- project imports --- ###
from typing import Any, Dict, List, Optional
from calendar_mcp.api.registry import ToolRegistry
from calendar_mcp.config import Settings
from calendar_mcp.domain.errors import UpstreamError
from calendar_mcp.domain.schemas import (
    AddEventParams, CoordinatesParams, DeleteEventParams, DistanceParams,
    GetEventParams, GetEventsParams, UpdateEventParams,
)
from calendar_mcp.services.calendar_service import CalendarClient
from calendar_mcp.services.google_auth import GoogleAuth
from calendar_mcp.services.routing_service import RoutingClient


def build_registry(
    settings: Settings,
    cal: Optional[CalendarClient] = None,
    routing: Optional[RoutingClient] = None,
) -> ToolRegistry:
    """
    Register the calendar and routing tools against their adapters.
    Inputs:
        settings: resolved configuration.
        cal / routing: prebuilt adapters (tests pass fakes); built from settings otherwise.
    Returns:
        ToolRegistry with all seven tools.
    """
    cal = cal or CalendarClient(GoogleAuth(settings), settings)
    routing = routing or RoutingClient(settings)
    reg = ToolRegistry()

    ### -------------------------- Calendar --------------------------------- ###

    @reg.tool("get_events", "Get user's Google Calendar events", GetEventsParams)
    def get_events(p: GetEventsParams) -> List[Dict[str, Any]]:
        return cal.list_events(p.start_date, p.end_date)

    @reg.tool("get_event", "Get a specific Google Calendar event", GetEventParams)
    def get_event(p: GetEventParams) -> Dict[str, Any]:
        return cal.get_event(p.event_id)

    @reg.tool("add_event", "Add a new event to user's Google Calendar", AddEventParams)
    def add_event(p: AddEventParams) -> Dict[str, Any]:
        return cal.create_event(p.title, p.start, p.end, location=p.location)

    @reg.tool("update_event", "Update an event on a user's Google Calendar", UpdateEventParams)
    def update_event(p: UpdateEventParams) -> Dict[str, Any]:
        return cal.update_event(p.event_id, title=p.title, start=p.start, end=p.end, location=p.location)

    @reg.tool("delete_event", "Delete an event from a user's Google Calendar", DeleteEventParams)
    def delete_event(p: DeleteEventParams) -> Any:
        return cal.delete_event(p.event_id)

    ### -------------------------- Routing ---------------------------------- ###

    @reg.tool("get_distance_and_time", "Get the distance and time between two points", DistanceParams)
    async def get_distance_and_time(p: DistanceParams) -> Dict[str, str]:
        try:
            summary = await routing.route_summary(p.point1_coordinates, p.point2_coordinates)
        except UpstreamError as e:
            raise UpstreamError(f"Error fetching distance data ({e}). Please check coordinates or API key.",
                                status=e.status) from e
        km = summary["distance"] / 1000
        mins = summary["duration"] / 60
        return {"distance": f"{km:.2f} km", "duration": f"{mins:.2f} mins"}

    @reg.tool("get_coordinates", "Get the coordinates of a place", CoordinatesParams)
    async def get_coordinates(p: CoordinatesParams) -> Dict[str, List[float]]:
        try:
            coords = await routing.geocode(p.place)
        except UpstreamError as e:
            raise UpstreamError(f"Error fetching coordinates ({e})", status=e.status) from e
        return {"coordinates": coords}

    return reg
