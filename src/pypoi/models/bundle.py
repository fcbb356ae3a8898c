"""Content bundle models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pypoi._normalize import safe_float, safe_str
from pypoi.models._base import PoiBaseModel


class BundleMeta(PoiBaseModel):
    """Bundle metadata.

    ``version`` is compared numerically; a bundle replaces the held one only
    when its version is strictly greater. Keys beyond ``version`` and
    ``source_url`` are kept in ``raw``.
    """

    version: float
    source_url: str

    @field_validator("source_url")
    @classmethod
    def _strip_url(cls, value: str) -> str:
        url = value.strip()
        if not url:
            raise ValueError("source_url must be non-empty")
        return url


class AppInfo(PoiBaseModel):
    """App-level descriptive fields for one locale."""

    name: str | None = None
    description: str | None = None
    contact: str | None = None
    website: str | None = None


class PoiRecord(PoiBaseModel):
    """A point of interest.

    Parameters
    ----------
    id : int or str
        Stable identifier within the bundle.
    name : str or None
        Display name.
    description : str or None
        Long description.
    latitude : float or None
        Latitude in degrees. Bundles carry it as ``lat`` (often a string).
    longitude : float or None
        Longitude in degrees. Bundles carry it as ``lon``.
    images : list of str
        Image URLs.
    attributions : list of str
        Credit lines for the images and texts.
    external_ids : dict
        Identifiers in external catalogues (e.g. ``{"wikidata": "Q1492"}``).
    raw : dict
        Original record dict.
    """

    id: int | str
    name: str | None = None
    description: str | None = None
    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("longitude", "lon", "lng"))
    images: list[str] = Field(default_factory=list)
    attributions: list[str] = Field(default_factory=list)
    external_ids: dict[str, Any] = Field(default_factory=dict)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return safe_str(value)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class LocaleContent(PoiBaseModel):
    """Content for a single locale: app info plus the POI list."""

    app: AppInfo = Field(default_factory=AppInfo)
    pois: list[PoiRecord] = Field(default_factory=list)


class ContentBundle(PoiBaseModel):
    """A versioned content payload keyed by locale tag.

    An empty ``content`` mapping is representable; locale resolution
    rejects it with :class:`~pypoi.exceptions.EmptyLocaleSetError`.
    """

    meta: BundleMeta
    content: dict[str, LocaleContent] = Field(default_factory=dict)

    @property
    def version(self) -> float:
        return self.meta.version

    @property
    def source_url(self) -> str:
        return self.meta.source_url

    @property
    def available_locales(self) -> tuple[str, ...]:
        return tuple(self.content)

    def for_locale(self, locale: str) -> LocaleContent:
        """Return the content block for an already-resolved *locale*."""
        try:
            return self.content[locale]
        except KeyError:
            raise KeyError(f"bundle has no content for locale {locale!r}") from None
