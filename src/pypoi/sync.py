"""Best-effort refresh of the content bundle from its remote copy.

The bundled content is always usable offline. A newer remote bundle
replaces it when one can be fetched and validated; every network or
content problem degrades to keeping the local bundle.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from pypoi._redact import redact_for_log
from pypoi._transport import BundleTransport
from pypoi.exceptions import PoiConfigError, PoiTransportError
from pypoi.locales import resolve_locale
from pypoi.models.bundle import ContentBundle
from pypoi.state.store import AppDataStore

_logger = logging.getLogger(__name__)


def load_bundle(path: Path | str) -> ContentBundle:
    """Read and validate the bundled content file shipped with the app."""
    bundle_path = Path(path)
    try:
        text = bundle_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PoiConfigError(f"Cannot read content bundle {bundle_path}: {exc}") from exc
    try:
        return ContentBundle.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise PoiConfigError(f"Invalid content bundle {bundle_path}: {exc}") from exc


class DataSynchronizer:
    """Fetch the remote bundle and adopt it when its version is newer.

    Parameters
    ----------
    transport
        Anything implementing :class:`~pypoi._transport.BundleTransport`.
        ``None`` disables syncing.
    requested_locale
        Tag the user asked for. After adopting a remote bundle the display
        locale is resolved again from this tag against the remote locales.
        Defaults to the locale currently held by the store.
    enabled
        When ``False``, :meth:`sync` performs no network I/O.
    """

    def __init__(
        self,
        transport: BundleTransport | None,
        *,
        requested_locale: str | None = None,
        enabled: bool = True,
    ) -> None:
        self._transport = transport
        self._requested_locale = requested_locale
        self._enabled = enabled and transport is not None

    async def _fetch_remote(self, url: str) -> ContentBundle | None:
        assert self._transport is not None  # noqa: S101
        try:
            payload = await self._transport.get_json(url)
        except PoiTransportError as exc:
            _logger.warning("Bundle refresh from %s failed: %s", url, exc)
            return None

        try:
            remote = ContentBundle.model_validate(payload)
        except ValidationError as exc:
            _logger.warning("Ignoring malformed remote bundle from %s (%d errors)", url, exc.error_count())
            _logger.debug("Malformed remote bundle: %s", redact_for_log(payload), exc_info=True)
            return None

        if not remote.available_locales:
            _logger.warning("Ignoring remote bundle from %s: it carries no locales", url)
            return None
        return remote

    async def sync(self, local_bundle: ContentBundle, store: AppDataStore) -> float:
        """Refresh *store* from the remote copy of *local_bundle*.

        Returns the version that is active afterwards. Never raises for
        network or content errors.
        """
        local_version = local_bundle.meta.version
        if not self._enabled:
            _logger.debug("Bundle sync disabled; keeping version %s", local_version)
            return local_version

        url = local_bundle.meta.source_url
        remote = await self._fetch_remote(url)
        if remote is None:
            return local_version

        _logger.debug("Remote bundle meta: %s", redact_for_log(remote.meta.raw))

        if remote.meta.version <= local_version:
            _logger.debug(
                "Remote bundle version %s is not newer than %s; keeping local content",
                remote.meta.version,
                local_version,
            )
            return local_version

        requested = self._requested_locale or store.get("locale") or ""
        locale = resolve_locale(requested, remote.available_locales)
        store.apply_content(remote, locale)
        _logger.info("Adopted remote bundle version %s (was %s), locale %s", remote.meta.version, local_version, locale)
        return remote.meta.version
