"""In-memory application cache.

The store is the single source of truth for the current content snapshot
and the values derived from it during bootstrap. It is created once, passed
explicitly to every component that reads or writes it, and torn down when
the app exits. Writers run one after another in the bootstrap pipeline, so
there is no locking.
"""

from __future__ import annotations

import copy
import logging
import secrets
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pypoi.exceptions import PoiStateError
from pypoi.models.bundle import AppInfo, BundleMeta, ContentBundle, LocaleContent, PoiRecord
from pypoi.models.coordinates import Coordinates

_logger = logging.getLogger(__name__)


def new_user_id() -> str:
    """Random opaque token identifying this app session."""
    return secrets.token_hex(16)


class AppCache(BaseModel):
    """Everything the pages need once bootstrap has finished."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    meta: BundleMeta | None = None
    content: dict[str, LocaleContent] = Field(default_factory=dict)
    locale: str | None = None
    app_info: AppInfo | None = None
    pois: list[PoiRecord] = Field(default_factory=list)
    my_coordinates: Coordinates = Field(default_factory=Coordinates)
    global_map_url: str | None = None
    user_id: str = Field(default_factory=new_user_id)


class AppDataStore:
    """Keyed access to the :class:`AppCache`.

    Keys are the ``AppCache`` field names. Values are validated on write,
    so ``store.set("my_coordinates", {"lat": 41.5, "lon": 2.1})`` stores a
    :class:`Coordinates`.
    """

    KEYS: frozenset[str] = frozenset(AppCache.model_fields)

    def __init__(self, cache: AppCache | None = None) -> None:
        self._cache: AppCache | None = cache if cache is not None else AppCache()

    @classmethod
    def create(cls, *, user_id: str | None = None) -> AppDataStore:
        cache = AppCache() if user_id is None else AppCache(user_id=user_id)
        _logger.debug("App cache created")
        return cls(cache)

    @property
    def closed(self) -> bool:
        return self._cache is None

    def _require_cache(self) -> AppCache:
        if self._cache is None:
            raise PoiStateError("App cache has been torn down")
        return self._cache

    def _check_key(self, key: str) -> None:
        if key not in self.KEYS:
            raise KeyError(f"unknown app cache key {key!r}")

    def get(self, key: str) -> Any:
        cache = self._require_cache()
        self._check_key(key)
        value = getattr(cache, key)
        if isinstance(value, (dict, list)):
            return copy.deepcopy(value)
        return value

    def set(self, key: str, value: Any) -> None:
        cache = self._require_cache()
        self._check_key(key)
        setattr(cache, key, value)

    def apply_content(self, bundle: ContentBundle, locale: str) -> None:
        """Replace the content fields with *bundle* shown in *locale*.

        *locale* must already be resolved against ``bundle.content``.
        """
        cache = self._require_cache()
        block = bundle.for_locale(locale)
        cache.meta = bundle.meta
        cache.content = dict(bundle.content)
        cache.locale = locale
        cache.app_info = block.app
        cache.pois = list(block.pois)
        _logger.debug(
            "Applied bundle version=%s locale=%s pois=%d",
            bundle.meta.version,
            locale,
            len(block.pois),
        )

    @property
    def version(self) -> float | None:
        meta = self._require_cache().meta
        return meta.version if meta is not None else None

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of the whole cache as plain data."""
        return self._require_cache().model_dump(mode="json")

    def teardown(self) -> None:
        if self._cache is not None:
            _logger.debug("App cache torn down")
        self._cache = None
