from __future__ import annotations

from pathlib import Path

import pytest

from pypoi._constants import MAP_BASE_URL
from pypoi.config import PoiConfig
from pypoi.exceptions import PoiConfigError


def test_defaults() -> None:
    config = PoiConfig()
    assert config.locale == "en"
    assert config.map_base_url == MAP_BASE_URL
    assert config.sync_enabled is True
    assert config.bundle_path is None


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POI_LOCALE", "ca-ES")
    monkeypatch.setenv("POI_BUNDLE_PATH", "/data/bundle.json")
    monkeypatch.setenv("POI_HTTP_TIMEOUT", "3.5")
    monkeypatch.setenv("POI_SYNC_ENABLED", "off")
    monkeypatch.setenv("POI_MAP_ICON_COLOR", "336699")

    config = PoiConfig.from_env()

    assert config.locale == "ca-ES"
    assert config.bundle_path == Path("/data/bundle.json")
    assert config.http_timeout == 3.5
    assert config.sync_enabled is False
    assert config.map_icon_color == "336699"


def test_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POI_LOCALE", "ca")
    monkeypatch.setenv("POI_SYNC_ENABLED", "0")

    config = PoiConfig.from_env(locale="es", sync_enabled=True)

    assert config.locale == "es"
    assert config.sync_enabled is True


def test_bad_timeout_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POI_HTTP_TIMEOUT", "soon")
    with pytest.raises(PoiConfigError):
        PoiConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"locale": " "},
        {"http_timeout": 0},
        {"consent_buttons": ("Only one",)},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    with pytest.raises(PoiConfigError):
        PoiConfig(**kwargs)
