"""Data models for content bundles and positions."""

from pypoi.models._base import PoiBaseModel
from pypoi.models.bundle import AppInfo, BundleMeta, ContentBundle, LocaleContent, PoiRecord
from pypoi.models.coordinates import Coordinates

__all__ = [
    "AppInfo",
    "BundleMeta",
    "ContentBundle",
    "Coordinates",
    "LocaleContent",
    "PoiBaseModel",
    "PoiRecord",
]
