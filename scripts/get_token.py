from google_auth_oauthlib.flow import Flow
from calendar_mcp.config import load_settings
from calendar_mcp.services.google_auth import CALENDAR_SCOPES

#Run once to mint CALENDAR_REFRESH_TOKEN: open the URL, consent, paste the code back.
if __name__ == "__main__":
    s = load_settings()
    assert s.calendar_client_id and s.calendar_client_secret and s.calendar_redirect_uri, \
        "Set CALENDAR_CLIENT_ID, CALENDAR_CLIENT_SECRET and CALENDAR_REDIRECT_URI in .env"
    flow = Flow.from_client_config(
        {"installed": {
            "client_id": s.calendar_client_id,
            "client_secret": s.calendar_client_secret,
            "redirect_uris": [s.calendar_redirect_uri],
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": s.google_token_uri,
        }},
        scopes=CALENDAR_SCOPES,
        redirect_uri=s.calendar_redirect_uri,
    )
    # prompt=consent so Google issues a refresh token even on re-authorization
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")
    print("Authorize this app by visiting this URL:\n", auth_url)
    code = input("\nEnter the code from that page here: ").strip()
    flow.fetch_token(code=code)
    print("\nYour refresh token is:\n", flow.credentials.refresh_token)


# From root directory:
# python3 -m scripts.get_token
