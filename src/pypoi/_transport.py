"""HTTP transport for fetching the remote content bundle."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pypoi._constants import DEFAULT_HTTP_TIMEOUT, USER_AGENT
from pypoi.exceptions import PoiTransportError

_logger = logging.getLogger(__name__)


def _preview(body: bytes) -> str:
    return body[:200].decode("utf-8", errors="replace")


class BundleTransport(Protocol):
    """Structural transport interface used by the synchronizer.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpBundleTransport`) concrete.
    """

    async def get_json(self, url: str) -> Any:
        ...


class HttpBundleTransport:
    """Single-shot JSON GET over a shared aiohttp session."""

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(self, url: str) -> Any:
        """GET *url* and return the decoded JSON body.

        Raises :class:`PoiTransportError` for network errors, timeouts,
        any status other than 200, and bodies that are not UTF-8 JSON.
        """
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status != 200:
                    raise PoiTransportError(
                        f"HTTP {resp.status} from {url}: {_preview(body)}",
                        status_code=resp.status,
                        url=url,
                    )
        except PoiTransportError:
            raise
        except TimeoutError as exc:
            raise PoiTransportError(f"Request to {url} timed out", url=url) from exc
        except aiohttp.ClientError as exc:
            raise PoiTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            return json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PoiTransportError(
                f"Invalid JSON from {url}: {_preview(body)}",
                status_code=200,
                url=url,
            ) from exc
