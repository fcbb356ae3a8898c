"""Custom exception hierarchy for pypoi."""

from __future__ import annotations


class PoiError(Exception):
    """Base exception for all pypoi errors."""


class PoiConfigError(PoiError):
    """Invalid or missing configuration (including an unreadable bundle file)."""


class PoiStateError(PoiError):
    """A component was used outside its lifecycle or state machine."""


class EmptyLocaleSetError(PoiError):
    """No locale can be resolved because the available set is empty.

    This is a precondition violation: a bundle without any content locale
    can never be displayed.
    """


class PoiTransportError(PoiError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class GeolocationError(PoiError):
    """A single silent location attempt failed.

    ``code`` follows the W3C ``GeolocationPositionError`` numbering
    (1 permission denied, 2 position unavailable, 3 timeout) when the
    platform reports one.
    """

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3

    def __init__(self, message: str = "", *, code: int | None = None) -> None:
        self.code = code
        super().__init__(message or f"Geolocation failed (code={code})")


class LocationConsentDeniedError(PoiError):
    """The user chose "stop asking" in the location consent dialog.

    Location is required to browse, so this ends the application. It is a
    deliberate user decision, not a crash.
    """
