from calendar_mcp.config import Settings, load_settings
from calendar_mcp.services.google_auth import GoogleAuth


def check(settings: Settings) -> str:
    """Fetch the configured calendar's entry. Returns a one-line summary."""
    svc = GoogleAuth(settings).calendar()
    me = svc.calendarList().get(calendarId=settings.calendar_id).execute()
    return f"{settings.calendar_id}: {me.get('summary')} | tz: {me.get('timeZone')}"


#Run to check if calendar connected/working (uses CALENDAR_* from .env).
if __name__ == "__main__":
    print(check(load_settings()))


# From root directory:
# python3 -m scripts.check_calendar
