"""Application configuration for pypoi."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pypoi._constants import (
    CONSENT_BUTTONS,
    CONSENT_MESSAGE,
    CONSENT_TITLE,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_LOCALE,
    MAP_BASE_URL,
    MAP_ICON_COLOR,
)
from pypoi.exceptions import PoiConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class PoiConfig:
    """Bootstrap configuration.

    Parameters
    ----------
    locale : str
        Requested display locale tag (e.g. ``"ca-ES"``). Resolved against
        the locales the content bundle actually carries.
    bundle_path : Path or None
        Location of the bundled content JSON shipped with the app.
    map_base_url : str
        Map-rendering endpoint used for every map URL.
    map_icon_color : str
        Marker colour passed to the map renderer as ``icon``.
    http_timeout : float
        Total timeout in seconds for the remote bundle request.
    sync_enabled : bool
        When ``False`` the remote bundle is never fetched and the bundled
        content is used as-is.
    consent_title : str
        Title of the location consent dialog.
    consent_message : str
        Body of the location consent dialog.
    consent_buttons : tuple of str
        Labels for the "retry" and "stop asking" buttons, in that order.
    """

    locale: str = DEFAULT_LOCALE
    bundle_path: Path | None = None
    map_base_url: str = MAP_BASE_URL
    map_icon_color: str = MAP_ICON_COLOR
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    sync_enabled: bool = True
    consent_title: str = CONSENT_TITLE
    consent_message: str = CONSENT_MESSAGE
    consent_buttons: tuple[str, str] = CONSENT_BUTTONS

    def __post_init__(self) -> None:
        if not self.locale.strip():
            raise PoiConfigError("locale must be a non-empty tag")
        if self.http_timeout <= 0:
            raise PoiConfigError(f"http_timeout must be positive, got {self.http_timeout}")
        if len(self.consent_buttons) != 2:
            raise PoiConfigError("consent_buttons must hold exactly two labels")

    @classmethod
    def from_env(cls, **overrides: Any) -> PoiConfig:
        """Create configuration from ``POI_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "POI_LOCALE": "locale",
            "POI_MAP_BASE_URL": "map_base_url",
            "POI_MAP_ICON_COLOR": "map_icon_color",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        bundle_env = env.get("POI_BUNDLE_PATH")
        if bundle_env:
            config_kwargs["bundle_path"] = Path(bundle_env)

        timeout_env = env.get("POI_HTTP_TIMEOUT")
        if timeout_env is not None and "http_timeout" not in overrides:
            try:
                config_kwargs["http_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise PoiConfigError(f"POI_HTTP_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "sync_enabled" not in overrides:
            config_kwargs["sync_enabled"] = _env_bool(env.get("POI_SYNC_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
