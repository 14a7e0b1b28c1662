import logging
from typing import Dict, Any, List, Optional
from googleapiclient.errors import HttpError
from calendar_mcp.config import Settings
from calendar_mcp.domain.errors import NotFoundError, UpstreamError
from calendar_mcp.domain.schemas import EventRecord
from calendar_mcp.services.google_auth import GoogleAuth

logger = logging.getLogger(__name__)


def _upstream(e: HttpError, what: str) -> Exception:
    """Map a googleapiclient HttpError onto the error taxonomy."""
    status = getattr(e.resp, "status", None)
    reason = getattr(e, "reason", None) or str(e)
    logger.warning("calendar %s failed: HTTP %s %s", what, status, reason)
    if status in (404, 410):
        return NotFoundError(f"Event not found ({what}): {reason}")
    return UpstreamError(f"Google Calendar {what} failed: HTTP {status}: {reason}", status=status)


class CalendarClient:
    def __init__(self, auth: GoogleAuth, settings: Settings):
        """
        Google Calendar API client wrapper.
        Inputs:
            auth: GoogleAuth instance used to build the authorized service.
            settings: supplies the calendar id and list page size.
        """
        self._auth = auth
        self._calendar_id = settings.calendar_id
        self._max_results = settings.calendar_max_results

    def _svc(self):
        """
        Build and return a Calendar API service object using authorized credentials.
        Returns:
            googleapiclient Calendar API service instance.
        """
        return self._auth.calendar()

    def list_events(self, time_min: str, time_max: str) -> List[Dict[str, Any]]:
        """
        List events in [time_min, time_max), recurring events expanded, earliest first.
        Inputs:
            time_min: RFC 3339 lower bound.
            time_max: RFC 3339 upper bound.
        Returns:
            list of EventRecord dicts; empty when the calendar returns no items.
        """
        svc = self._svc()
        try:
            resp = svc.events().list(
                calendarId=self._calendar_id,
                timeMin=time_min,
                timeMax=time_max,
                maxResults=self._max_results,
                singleEvents=True,
                orderBy="startTime",
            ).execute()
        except HttpError as e:
            raise _upstream(e, "list") from e
        return [EventRecord.from_api(ev).model_dump(exclude_none=True) for ev in resp.get("items") or []]

    def get_event(self, event_id: str) -> Dict[str, Any]:
        """Fetch one event and reshape it into an EventRecord dict."""
        svc = self._svc()
        try:
            ev = svc.events().get(calendarId=self._calendar_id, eventId=event_id).execute()
        except HttpError as e:
            raise _upstream(e, "get") from e
        return EventRecord.from_api(ev).model_dump(exclude_none=True)

    def create_event(
        self, title: str,
        start: str, end: str,
        location: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a new event on the configured calendar.
        Inputs:
            title: event summary/title.
            start: start date-time.
            end: end date-time.
            Optional:
            location: location string.
        Returns:
            the created event exactly as Google returns it.
        """
        body: Dict[str, Any] = {
            "summary": title,
            "start": {"dateTime": start},
            "end":   {"dateTime": end},
        }
        if location: body["location"] = location
        svc = self._svc()
        try:
            return svc.events().insert(calendarId=self._calendar_id, body=body).execute()
        except HttpError as e:
            raise _upstream(e, "insert") from e

    def update_event(
        self, event_id: str,
        title: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        location: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Patch an event. Only the fields given are sent; nothing is cleared.
        Returns:
            the updated event exactly as Google returns it.
        """
        body: Dict[str, Any] = {}
        if title:    body["summary"]  = title
        if start:    body["start"]    = {"dateTime": start}
        if end:      body["end"]      = {"dateTime": end}
        if location: body["location"] = location
        svc = self._svc()
        try:
            return svc.events().patch(calendarId=self._calendar_id, eventId=event_id, body=body).execute()
        except HttpError as e:
            raise _upstream(e, "patch") from e

    def delete_event(self, event_id: str) -> Any:
        """Delete an event. Returns Google's (normally empty) response body."""
        svc = self._svc()
        try:
            return svc.events().delete(calendarId=self._calendar_id, eventId=event_id).execute()
        except HttpError as e:
            raise _upstream(e, "delete") from e
