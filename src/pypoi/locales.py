"""Content locale resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pypoi.exceptions import EmptyLocaleSetError

_logger = logging.getLogger(__name__)


def _candidates(requested: str) -> list[str]:
    """Longest-prefix-first candidates for *requested*.

    ``"en-US-POSIX"`` yields ``["en-US-POSIX", "en-US", "en"]``. Platform
    APIs sometimes use ``_`` as the separator, so it is treated like ``-``.
    """
    parts = [part for part in requested.strip().replace("_", "-").split("-") if part]
    return ["-".join(parts[:end]) for end in range(len(parts), 0, -1)]


def resolve_locale(requested: str, available: Iterable[str]) -> str:
    """Pick the best available content locale for *requested*.

    An exact match is returned unchanged. Otherwise the tag is shortened one
    component at a time until a prefix is available. With no match at all
    the first enumerated key of *available* is returned, so the result is
    always a valid key.

    Raises :class:`EmptyLocaleSetError` when *available* is empty.
    """
    keys = list(available)
    if not keys:
        raise EmptyLocaleSetError(f"no content locales available to resolve {requested!r}")

    if requested in keys:
        return requested

    for candidate in _candidates(requested):
        if candidate in keys:
            _logger.debug("Resolved locale %r to %r", requested, candidate)
            return candidate

    fallback = keys[0]
    _logger.debug("No locale matches %r; falling back to %r", requested, fallback)
    return fallback
