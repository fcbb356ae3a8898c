"""Tests for bundle model parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pypoi.models.bundle import ContentBundle, PoiRecord
from pypoi.models.coordinates import Coordinates


def _payload() -> dict:
    return {
        "meta": {"version": 3, "sourceUrl": "https://content.example.org/bundle.json", "generated": "2026-01-01"},
        "content": {
            "en": {
                "app": {"name": "Old Town Walk", "description": "--"},
                "pois": [
                    {"id": 1, "name": "Cathedral", "lat": "41.3839", "lon": "2.1762", "images": ["a.jpg"]},
                    {"id": "gate", "name": "", "lat": "", "lon": "--"},
                ],
            },
            "ca": {"app": {"name": "Passeig"}, "pois": []},
        },
    }


class TestContentBundle:
    def test_parses_camel_and_snake_keys(self) -> None:
        bundle = ContentBundle.model_validate(_payload())
        assert bundle.version == 3
        assert bundle.source_url == "https://content.example.org/bundle.json"
        assert bundle.available_locales == ("en", "ca")

        snake = ContentBundle.model_validate(
            {"meta": {"version": 1, "source_url": "https://x.test/b.json"}, "content": {}}
        )
        assert snake.source_url == "https://x.test/b.json"

    def test_extra_meta_keys_kept_in_raw(self) -> None:
        bundle = ContentBundle.model_validate(_payload())
        assert bundle.meta.raw["generated"] == "2026-01-01"

    def test_placeholders_fall_back_to_defaults(self) -> None:
        bundle = ContentBundle.model_validate(_payload())
        assert bundle.for_locale("en").app.description is None
        gate = bundle.for_locale("en").pois[1]
        assert gate.name is None
        assert gate.latitude is None
        assert gate.has_coordinates is False

    def test_missing_version_is_invalid(self) -> None:
        with pytest.raises(ValidationError):
            ContentBundle.model_validate({"meta": {"source_url": "https://x.test"}, "content": {}})

    def test_non_numeric_version_is_invalid(self) -> None:
        with pytest.raises(ValidationError):
            ContentBundle.model_validate({"meta": {"version": "v2", "source_url": "https://x.test"}, "content": {}})

    def test_for_locale_unknown_raises_key_error(self) -> None:
        bundle = ContentBundle.model_validate(_payload())
        with pytest.raises(KeyError):
            bundle.for_locale("fr")


class TestPoiRecord:
    def test_string_coordinates_are_coerced(self) -> None:
        poi = PoiRecord.model_validate({"id": 1, "lat": "41.5", "lon": "2.1"})
        assert poi.latitude == 41.5
        assert poi.longitude == 2.1
        assert poi.has_coordinates

    def test_long_names_accepted(self) -> None:
        poi = PoiRecord.model_validate({"id": 7, "latitude": 1.0, "lng": 2.0, "externalIds": {"wikidata": "Q1492"}})
        assert (poi.latitude, poi.longitude) == (1.0, 2.0)
        assert poi.external_ids == {"wikidata": "Q1492"}

    def test_records_are_frozen(self) -> None:
        poi = PoiRecord.model_validate({"id": 1})
        with pytest.raises(ValidationError):
            poi.name = "changed"  # type: ignore[misc]


class TestCoordinates:
    def test_defaults_to_origin(self) -> None:
        assert Coordinates() == Coordinates(lat=0.0, lon=0.0)

    def test_platform_shape(self) -> None:
        coords = Coordinates.model_validate({"latitude": 41.5, "longitude": 2.1, "accuracy": 12})
        assert coords.as_geojson() == [2.1, 41.5]

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Coordinates(lat=91.0, lon=0.0)
