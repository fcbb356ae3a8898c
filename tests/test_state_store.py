from __future__ import annotations

import pytest
from pydantic import ValidationError

from pypoi.exceptions import PoiStateError
from pypoi.models.bundle import ContentBundle
from pypoi.models.coordinates import Coordinates
from pypoi.state.store import AppDataStore


def _bundle() -> ContentBundle:
    return ContentBundle.model_validate(
        {
            "meta": {"version": 2, "source_url": "https://content.example.org/bundle.json"},
            "content": {
                "en": {"app": {"name": "Walk"}, "pois": [{"id": 1, "lat": "1", "lon": "2"}]},
                "es": {"app": {"name": "Paseo"}, "pois": [{"id": 1, "lat": "1", "lon": "2"}, {"id": 2}]},
            },
        }
    )


def test_new_store_has_origin_coordinates_and_random_user_id() -> None:
    first = AppDataStore.create()
    second = AppDataStore.create()

    assert first.get("my_coordinates") == Coordinates(lat=0, lon=0)
    assert first.get("user_id")
    assert first.get("user_id") != second.get("user_id")
    assert first.get("meta") is None
    assert first.get("global_map_url") is None


def test_explicit_user_id() -> None:
    store = AppDataStore.create(user_id="abc")
    assert store.get("user_id") == "abc"


def test_set_validates_values() -> None:
    store = AppDataStore.create()
    store.set("my_coordinates", {"lat": 41.5, "lon": 2.1})
    assert store.get("my_coordinates") == Coordinates(lat=41.5, lon=2.1)

    with pytest.raises(ValidationError):
        store.set("my_coordinates", {"lat": "north", "lon": 2.1})


def test_unknown_key_raises() -> None:
    store = AppDataStore.create()
    with pytest.raises(KeyError):
        store.get("favourites")
    with pytest.raises(KeyError):
        store.set("favourites", [])


def test_apply_content_replaces_content_fields() -> None:
    store = AppDataStore.create()
    bundle = _bundle()

    store.apply_content(bundle, "es")

    assert store.version == 2
    assert store.get("locale") == "es"
    assert store.get("app_info").name == "Paseo"
    assert [poi.id for poi in store.get("pois")] == [1, 2]
    assert set(store.get("content")) == {"en", "es"}


def test_get_returns_copies_of_containers() -> None:
    store = AppDataStore.create()
    store.apply_content(_bundle(), "en")

    pois = store.get("pois")
    pois.clear()

    assert len(store.get("pois")) == 1


def test_snapshot_is_plain_data() -> None:
    store = AppDataStore.create(user_id="u-1")
    store.apply_content(_bundle(), "en")

    snapshot = store.snapshot()

    assert snapshot["user_id"] == "u-1"
    assert snapshot["my_coordinates"] == {"lat": 0.0, "lon": 0.0}
    assert snapshot["meta"]["version"] == 2.0
    assert "raw" not in snapshot["meta"]


def test_teardown_closes_store() -> None:
    store = AppDataStore.create()
    store.teardown()

    assert store.closed
    with pytest.raises(PoiStateError):
        store.get("user_id")
    with pytest.raises(PoiStateError):
        store.set("global_map_url", "https://x.test")
