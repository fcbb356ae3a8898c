from __future__ import annotations

import json
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from pypoi._constants import MAP_BASE_URL, MAP_ICON_COLOR
from pypoi.maps import (
    build_global_map_url,
    build_item_map_url,
    build_item_map_urls,
    encode_uri_component,
)
from pypoi.models.bundle import PoiRecord


def test_item_url_geojson_is_lon_lat_point() -> None:
    url = build_item_map_url("en", {"id": 1, "lat": "41.5", "lon": "2.1"})

    geojson = url.split("&geojson=", 1)[1]
    assert json.loads(unquote(geojson)) == {
        "type": "Feature",
        "properties": {},
        "geometry": {"type": "Point", "coordinates": [2.1, 41.5]},
    }


def test_item_url_layout() -> None:
    url = build_item_map_url("ca", PoiRecord(id=1, latitude=41.5, longitude=2.1))

    assert url == (
        f"{MAP_BASE_URL}?icon={MAP_ICON_COLOR}&locale=ca&geojson="
        "%7B%22type%22%3A%22Feature%22%2C%22properties%22%3A%7B%7D%2C%22geometry%22%3A"
        "%7B%22type%22%3A%22Point%22%2C%22coordinates%22%3A%5B2.1%2C41.5%5D%7D%7D"
    )


def test_item_url_writes_whole_degrees_without_fraction() -> None:
    url = build_item_map_url("en", {"id": 1, "lat": "41", "lon": "2"})

    assert url.endswith("%22coordinates%22%3A%5B2%2C41%5D%7D%7D")


def test_global_url_layout() -> None:
    url = build_global_map_url("en", "https://content.example.org/bundle.json?v=2&x=a b")

    assert url == (
        f"{MAP_BASE_URL}?icon={MAP_ICON_COLOR}&locale=en"
        "&url=https%3A%2F%2Fcontent.example.org%2Fbundle.json%3Fv%3D2%26x%3Da%20b"
    )
    query = parse_qs(urlsplit(url).query)
    assert query["url"] == ["https://content.example.org/bundle.json?v=2&x=a b"]
    assert query["locale"] == ["en"]


def test_custom_base_and_icon() -> None:
    url = build_global_map_url("en", "https://x.test/b.json", base_url="https://m.test/", icon_color="00ff00")

    assert url.startswith("https://m.test/?icon=00ff00&locale=en&url=")


def test_encoding_matches_encode_uri_component() -> None:
    assert encode_uri_component("a-b_c.d!e~f*g'h(i)j k/l") == "a-b_c.d!e~f*g'h(i)j%20k%2Fl"
    assert encode_uri_component("café") == "caf%C3%A9"


def test_item_without_coordinates_raises() -> None:
    with pytest.raises(ValueError):
        build_item_map_url("en", {"id": 2, "lat": "", "lon": "2.1"})


def test_item_urls_skip_records_without_coordinates() -> None:
    pois = [
        PoiRecord(id=1, latitude=41.5, longitude=2.1),
        PoiRecord(id="no-geo"),
    ]

    urls = build_item_map_urls("en", pois)

    assert list(urls) == [1]
    assert urls[1] == build_item_map_url("en", pois[0])


def test_urls_are_deterministic() -> None:
    item = {"id": 1, "lat": 41.5, "lon": 2.1}
    assert build_item_map_url("en", item) == build_item_map_url("en", item)
