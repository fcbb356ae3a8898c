"""Startup pipeline.

Runs once at app start, each stage after the previous one has finished::

    resolve locale -> sync bundle -> acquire location -> global map URL -> "ready"

There is no retry or rollback at this level. The synchronizer never fails
the pipeline; a "stop asking" answer in the location dialog ends it with
:class:`~pypoi.exceptions.LocationConsentDeniedError` and ``"ready"`` is
never published.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pypoi._transport import BundleTransport, HttpBundleTransport
from pypoi.config import PoiConfig
from pypoi.exceptions import PoiConfigError, PoiStateError
from pypoi.geolocation import ConsentDialog, GeolocationAcquirer, LocationProvider
from pypoi.locales import resolve_locale
from pypoi.maps import build_global_map_url
from pypoi.models.bundle import ContentBundle
from pypoi.state.events import ReadyChannel
from pypoi.state.store import AppDataStore
from pypoi.sync import DataSynchronizer, load_bundle

_logger = logging.getLogger(__name__)


class BootstrapPipeline:
    """Populate the app cache and announce readiness.

    Usage::

        async with BootstrapPipeline(config, provider, dialog) as pipeline:
            pipeline.ready.subscribe(render_home)
            await pipeline.run()

    Parameters
    ----------
    config
        Bootstrap configuration.
    location_provider, consent_dialog
        Platform capabilities used by the geolocation stage.
    bundle
        Bundled content. Loaded from ``config.bundle_path`` when omitted.
    store
        App cache to populate. A fresh one is created when omitted and torn
        down on ``__aexit__``; a passed-in store is left open.
    ready
        Channel to publish on. A fresh one is created when omitted.
    transport
        Remote bundle transport. When omitted an aiohttp session is opened
        on ``__aenter__`` and closed on ``__aexit__``.
    http_session
        Externally owned aiohttp session for the default transport.
    """

    def __init__(
        self,
        config: PoiConfig,
        location_provider: LocationProvider,
        consent_dialog: ConsentDialog,
        *,
        bundle: ContentBundle | None = None,
        store: AppDataStore | None = None,
        ready: ReadyChannel | None = None,
        transport: BundleTransport | None = None,
        http_session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._bundle = bundle
        self._owns_store = store is None
        self.store = store if store is not None else AppDataStore.create()
        self.ready = ready if ready is not None else ReadyChannel()
        self._transport = transport
        self._external_session = http_session is not None
        self._http_session = http_session
        self._acquirer = GeolocationAcquirer(
            location_provider,
            consent_dialog,
            title=config.consent_title,
            message=config.consent_message,
            buttons=config.consent_buttons,
        )
        self._ran = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BootstrapPipeline:
        if self._transport is None and self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if self._owns_store:
            self.store.teardown()

    def _require_transport(self) -> BundleTransport:
        if self._transport is not None:
            return self._transport
        if self._http_session is None:
            raise PoiStateError("Pipeline not initialized. Use 'async with BootstrapPipeline(...) as pipeline:'")
        self._transport = HttpBundleTransport(self._http_session, timeout=self._config.http_timeout)
        return self._transport

    def _local_bundle(self) -> ContentBundle:
        if self._bundle is None:
            if self._config.bundle_path is None:
                raise PoiConfigError("No content bundle given and config.bundle_path is not set")
            self._bundle = load_bundle(self._config.bundle_path)
        return self._bundle

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _apply_local(self, bundle: ContentBundle) -> str:
        locale = resolve_locale(self._config.locale, bundle.available_locales)
        self.store.apply_content(bundle, locale)
        return locale

    async def _sync(self, bundle: ContentBundle) -> float:
        synchronizer = DataSynchronizer(
            self._require_transport() if self._config.sync_enabled else None,
            requested_locale=self._config.locale,
            enabled=self._config.sync_enabled,
        )
        return await synchronizer.sync(bundle, self.store)

    def _build_global_url(self) -> str:
        meta = self.store.get("meta")
        url = build_global_map_url(
            self.store.get("locale"),
            meta.source_url,
            base_url=self._config.map_base_url,
            icon_color=self._config.map_icon_color,
        )
        self.store.set("global_map_url", url)
        return url

    async def run(self) -> AppDataStore:
        """Run every stage once and publish ``"ready"``.

        Returns the populated store.
        """
        if self._ran:
            raise PoiStateError("Bootstrap pipeline already ran")
        self._ran = True

        bundle = self._local_bundle()
        locale = self._apply_local(bundle)
        _logger.debug("Bootstrap: local bundle version=%s locale=%s", bundle.meta.version, locale)

        version = await self._sync(bundle)
        _logger.debug("Bootstrap: active bundle version=%s", version)

        await self._acquirer.acquire(self.store)

        url = self._build_global_url()
        _logger.debug("Bootstrap: global map url=%s", url)

        self.ready.publish()
        _logger.info("Bootstrap complete (version=%s, locale=%s)", version, self.store.get("locale"))
        return self.store

