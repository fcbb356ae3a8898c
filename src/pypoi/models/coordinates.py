"""Geographic coordinate model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Coordinates(BaseModel):
    """A WGS84 position in degrees.

    Accepts the platform geolocation shape (``latitude``/``longitude``) as
    well as the short ``lat``/``lon`` form used throughout the bundle.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    lat: float = Field(default=0.0, ge=-90.0, le=90.0, validation_alias=AliasChoices("lat", "latitude"))
    lon: float = Field(default=0.0, ge=-180.0, le=180.0, validation_alias=AliasChoices("lon", "lng", "longitude"))

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def _reject_blank(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            raise ValueError("coordinate must not be blank")
        return value

    def as_geojson(self) -> list[float]:
        """Return ``[lon, lat]`` in GeoJSON axis order."""
        return [self.lon, self.lat]
