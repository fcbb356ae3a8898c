"""pypoi - Async bootstrap core for a point-of-interest browsing app."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pypoi")
except PackageNotFoundError:
    __version__ = "0+local"
from pypoi.bootstrap import BootstrapPipeline
from pypoi.config import PoiConfig
from pypoi.exceptions import (
    EmptyLocaleSetError,
    GeolocationError,
    LocationConsentDeniedError,
    PoiConfigError,
    PoiError,
    PoiStateError,
    PoiTransportError,
)
from pypoi.geolocation import (
    CallbackConsentDialog,
    CallbackLocationProvider,
    ConsentChoice,
    ConsentDialog,
    GeolocationAcquirer,
    GeoState,
    LocationProvider,
)
from pypoi.locales import resolve_locale
from pypoi.maps import build_global_map_url, build_item_map_url, build_item_map_urls
from pypoi.models import AppInfo, BundleMeta, ContentBundle, Coordinates, LocaleContent, PoiRecord
from pypoi.state.events import ReadyChannel
from pypoi.state.store import AppCache, AppDataStore
from pypoi.sync import DataSynchronizer, load_bundle

__all__ = [
    "__version__",
    "AppCache",
    "AppDataStore",
    "AppInfo",
    "BootstrapPipeline",
    "BundleMeta",
    "CallbackConsentDialog",
    "CallbackLocationProvider",
    "ConsentChoice",
    "ConsentDialog",
    "ContentBundle",
    "Coordinates",
    "DataSynchronizer",
    "EmptyLocaleSetError",
    "GeoState",
    "GeolocationAcquirer",
    "GeolocationError",
    "LocaleContent",
    "LocationConsentDeniedError",
    "LocationProvider",
    "PoiConfig",
    "PoiConfigError",
    "PoiError",
    "PoiRecord",
    "PoiStateError",
    "PoiTransportError",
    "ReadyChannel",
    "build_global_map_url",
    "build_item_map_url",
    "build_item_map_urls",
    "load_bundle",
    "resolve_locale",
]
