"""Location acquisition with an interactive consent-retry loop.

Browsing is gated on the user's position. A silent request is tried first;
when it fails the user is asked, through a two-button dialog, to retry or to
stop asking. "Stop asking" ends the application. There is deliberately no
attempt limit and no timeout: each further attempt is triggered by a real
answer from the user, so the loop waits on input and never spins.

The protocol is an explicit state machine::

    IDLE -> ATTEMPTING -> GRANTED
                |
                v
          NEEDS_CONSENT -> ATTEMPTING   (retry or dismissed)
                |
                v
              EXITED                    (stop asking)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from pydantic import ValidationError

from pypoi._constants import (
    CONSENT_BUTTONS,
    CONSENT_MESSAGE,
    CONSENT_RETRY_INDEX,
    CONSENT_STOP_INDEX,
    CONSENT_TITLE,
)
from pypoi.exceptions import GeolocationError, LocationConsentDeniedError, PoiStateError
from pypoi.models.coordinates import Coordinates
from pypoi.state.store import AppDataStore

_logger = logging.getLogger(__name__)


class GeoState(StrEnum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    NEEDS_CONSENT = "needs_consent"
    GRANTED = "granted"
    EXITED = "exited"


class ConsentChoice(StrEnum):
    RETRY = "retry"
    STOP_ASKING = "stop_asking"
    DISMISSED = "dismissed"


# ------------------------------------------------------------------
# Events
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Start:
    """Begin acquisition."""


@dataclass(frozen=True, slots=True)
class AttemptSucceeded:
    coordinates: Coordinates


@dataclass(frozen=True, slots=True)
class AttemptFailed:
    error: GeolocationError


@dataclass(frozen=True, slots=True)
class ConsentAnswered:
    choice: ConsentChoice


GeoEvent = Start | AttemptSucceeded | AttemptFailed | ConsentAnswered


def transition(state: GeoState, event: GeoEvent) -> GeoState:
    """Return the state following *event* in *state*.

    Raises :class:`PoiStateError` for a pair the protocol does not allow,
    including any event once ``GRANTED`` or ``EXITED`` has been reached.
    """
    if state is GeoState.IDLE and isinstance(event, Start):
        return GeoState.ATTEMPTING
    if state is GeoState.ATTEMPTING:
        if isinstance(event, AttemptSucceeded):
            return GeoState.GRANTED
        if isinstance(event, AttemptFailed):
            return GeoState.NEEDS_CONSENT
    if state is GeoState.NEEDS_CONSENT and isinstance(event, ConsentAnswered):
        if event.choice is ConsentChoice.STOP_ASKING:
            return GeoState.EXITED
        return GeoState.ATTEMPTING
    raise PoiStateError(f"{type(event).__name__} is not valid in state {state.value}")


def choice_from_button(index: int | None) -> ConsentChoice:
    """Map a 0-based dialog button index (``None`` = dismissed) to a choice."""
    if index == CONSENT_STOP_INDEX:
        return ConsentChoice.STOP_ASKING
    if index == CONSENT_RETRY_INDEX:
        return ConsentChoice.RETRY
    return ConsentChoice.DISMISSED


# ------------------------------------------------------------------
# Platform capabilities
# ------------------------------------------------------------------


class LocationProvider(Protocol):
    """Silent one-shot position request.

    Raises :class:`GeolocationError` when the position cannot be obtained.
    """

    async def current_position(self) -> Coordinates:
        ...


class ConsentDialog(Protocol):
    """Modal dialog with labelled buttons.

    Returns the 0-based index of the chosen button, or ``None`` when the
    dialog was dismissed without a choice.
    """

    async def ask(self, title: str, message: str, buttons: Sequence[str]) -> int | None:
        ...


PositionCallback = Callable[[Mapping[str, Any]], None]
ErrorCallback = Callable[[Any], None]


class CallbackLocationProvider:
    """Adapt a callback-style platform geolocation API.

    *request* is called with ``(on_success, on_error)``. ``on_success``
    receives a mapping with ``latitude``/``longitude`` (optionally nested
    under ``coords``); ``on_error`` receives an error code or object with a
    ``code`` attribute.
    """

    def __init__(self, request: Callable[[PositionCallback, ErrorCallback], None]) -> None:
        self._request = request

    async def current_position(self) -> Coordinates:
        loop = asyncio.get_running_loop()
        fut: asyncio.Future[Coordinates] = loop.create_future()

        def _on_success(position: Mapping[str, Any]) -> None:
            if fut.done():
                return
            coords = position.get("coords", position)
            try:
                loop.call_soon_threadsafe(_resolve, Coordinates.model_validate(dict(coords)))
            except ValidationError as exc:
                loop.call_soon_threadsafe(_reject, GeolocationError(f"Invalid position payload: {exc}"))

        def _on_error(error: Any) -> None:
            code = getattr(error, "code", error)
            loop.call_soon_threadsafe(_reject, GeolocationError(code=code if isinstance(code, int) else None))

        def _resolve(coords: Coordinates) -> None:
            if not fut.done():
                fut.set_result(coords)

        def _reject(exc: GeolocationError) -> None:
            if not fut.done():
                fut.set_exception(exc)

        self._request(_on_success, _on_error)
        return await fut


class CallbackConsentDialog:
    """Adapt a callback-style platform confirm dialog.

    *show* is called with ``(message, on_choice, title, buttons)``.
    ``on_choice`` receives the 1-based button index, ``0`` meaning the
    dialog was dismissed, the way native confirm dialogs report it.
    """

    def __init__(self, show: Callable[[str, Callable[[int], None], str, Sequence[str]], None]) -> None:
        self._show = show

    async def ask(self, title: str, message: str, buttons: Sequence[str]) -> int | None:
        loop = asyncio.get_running_loop()
        fut: asyncio.Future[int | None] = loop.create_future()

        def _set(index: int | None) -> None:
            if not fut.done():
                fut.set_result(index)

        def _on_choice(button: int) -> None:
            loop.call_soon_threadsafe(_set, button - 1 if button > 0 else None)

        self._show(message, _on_choice, title, list(buttons))
        return await fut


# ------------------------------------------------------------------
# Acquirer
# ------------------------------------------------------------------


class GeolocationAcquirer:
    """Drive the state machine until coordinates are granted or the user quits.

    ``attempts`` counts silent requests issued; ``history`` records every
    state visited, starting with ``IDLE``.
    """

    def __init__(
        self,
        provider: LocationProvider,
        dialog: ConsentDialog,
        *,
        title: str = CONSENT_TITLE,
        message: str = CONSENT_MESSAGE,
        buttons: Sequence[str] = CONSENT_BUTTONS,
    ) -> None:
        self._provider = provider
        self._dialog = dialog
        self._title = title
        self._message = message
        self._buttons = tuple(buttons)
        self.state = GeoState.IDLE
        self.history: list[GeoState] = [GeoState.IDLE]
        self.attempts = 0

    def _advance(self, event: GeoEvent) -> GeoState:
        new_state = transition(self.state, event)
        _logger.debug("Geolocation %s --%s--> %s", self.state.value, type(event).__name__, new_state.value)
        self.state = new_state
        self.history.append(new_state)
        return new_state

    async def _attempt(self) -> GeoEvent:
        self.attempts += 1
        try:
            coords = await self._provider.current_position()
        except GeolocationError as exc:
            _logger.debug("Silent location attempt %d failed: %s", self.attempts, exc)
            return AttemptFailed(exc)
        except Exception as exc:
            _logger.warning("Location provider error on attempt %d: %s", self.attempts, exc, exc_info=True)
            return AttemptFailed(GeolocationError(str(exc), code=GeolocationError.POSITION_UNAVAILABLE))
        return AttemptSucceeded(coords)

    async def _ask_consent(self) -> GeoEvent:
        index = await self._dialog.ask(self._title, self._message, self._buttons)
        return ConsentAnswered(choice_from_button(index))

    async def acquire(self, store: AppDataStore) -> Coordinates:
        """Obtain coordinates and write them to ``store["my_coordinates"]``.

        Raises :class:`LocationConsentDeniedError` when the user chooses to
        stop; the store is left untouched in that case.
        """
        if self.state is not GeoState.IDLE:
            raise PoiStateError(f"acquire() already ran (state={self.state.value})")

        state = self._advance(Start())
        while True:
            if state is GeoState.ATTEMPTING:
                event = await self._attempt()
            else:
                event = await self._ask_consent()
            state = self._advance(event)

            if state is GeoState.GRANTED:
                assert isinstance(event, AttemptSucceeded)  # noqa: S101
                store.set("my_coordinates", event.coordinates)
                _logger.info("Location granted after %d attempt(s)", self.attempts)
                return event.coordinates
            if state is GeoState.EXITED:
                _logger.info("User stopped location requests after %d attempt(s)", self.attempts)
                raise LocationConsentDeniedError("Location permission denied by user")
