"""Internal constants shared across the library."""

MAP_BASE_URL = "https://maps.pypoi.app/embed.html"
MAP_ICON_COLOR = "d9534f"
USER_AGENT = "pypoi/0.1"

DEFAULT_LOCALE = "en"
DEFAULT_HTTP_TIMEOUT: float = 15.0

# Consent dialog shown after a failed silent location attempt.
CONSENT_TITLE = "Location required"
CONSENT_MESSAGE = (
    "Points of interest are listed by distance, so the app needs your location. "
    "Check that location services are enabled and try again."
)
CONSENT_BUTTONS: tuple[str, str] = ("Retry", "Stop asking")
CONSENT_RETRY_INDEX = 0
CONSENT_STOP_INDEX = 1

READY_MESSAGE = "ready"
