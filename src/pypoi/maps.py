"""Map display URLs.

The embedded map page takes its data from the query string: either the URL
of the whole bundle (``url=``) or a single GeoJSON feature (``geojson=``).
Values are percent-encoded the way JavaScript's ``encodeURIComponent``
does, so the URLs are byte-identical to the ones the web view expects.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

from pypoi._constants import MAP_BASE_URL, MAP_ICON_COLOR
from pypoi.models.bundle import PoiRecord

# Characters encodeURIComponent leaves alone beyond quote()'s defaults.
_URI_COMPONENT_SAFE = "!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def _js_number(value: float) -> float | int:
    # JSON.stringify writes integral numbers without a fraction.
    return int(value) if value.is_integer() else value


def point_feature(item: PoiRecord) -> dict[str, Any]:
    """GeoJSON ``Feature`` with a ``Point`` at ``[longitude, latitude]``."""
    if item.latitude is None or item.longitude is None:
        raise ValueError(f"POI {item.id!r} has no usable coordinates")
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {"type": "Point", "coordinates": [_js_number(item.longitude), _js_number(item.latitude)]},
    }


def _as_record(item: PoiRecord | Mapping[str, Any]) -> PoiRecord:
    if isinstance(item, PoiRecord):
        return item
    return PoiRecord.model_validate(dict(item))


def build_global_map_url(
    locale: str,
    source_url: str,
    *,
    base_url: str = MAP_BASE_URL,
    icon_color: str = MAP_ICON_COLOR,
) -> str:
    """URL of the map showing every POI of the bundle at *source_url*."""
    return f"{base_url}?icon={icon_color}&locale={locale}&url={encode_uri_component(source_url)}"


def build_item_map_url(
    locale: str,
    item: PoiRecord | Mapping[str, Any],
    *,
    base_url: str = MAP_BASE_URL,
    icon_color: str = MAP_ICON_COLOR,
) -> str:
    """URL of the map centred on a single POI.

    *item* may be a :class:`PoiRecord` or a raw record mapping with
    ``lat``/``lon``. Raises :class:`ValueError` when it has no coordinates.
    """
    feature = point_feature(_as_record(item))
    geojson = json.dumps(feature, separators=(",", ":"))
    return f"{base_url}?icon={icon_color}&locale={locale}&geojson={encode_uri_component(geojson)}"


def build_item_map_urls(
    locale: str,
    pois: Iterable[PoiRecord],
    *,
    base_url: str = MAP_BASE_URL,
    icon_color: str = MAP_ICON_COLOR,
) -> dict[int | str, str]:
    """Per-POI map URLs keyed by POI id; POIs without coordinates are skipped."""
    return {
        poi.id: build_item_map_url(locale, poi, base_url=base_url, icon_color=icon_color)
        for poi in pois
        if poi.has_coordinates
    }
