#!/usr/bin/env python3
"""Run the bootstrap pipeline from a terminal.

Loads a content bundle, refreshes it from its ``source_url``, asks for a
location (simulated), builds the global map URL and prints the resulting
app cache as JSON.

Usage
-----
::

    python scripts/run_bootstrap.py data/bundle.json --locale ca-ES --lat 41.38 --lon 2.17

Options::

    --locale TAG          Requested locale (default: POI_LOCALE or "en")
    --lat/--lon DEG       Position returned by the simulated location source
    --fail-location N     Fail the first N location attempts
    --no-sync             Do not fetch the remote bundle
    --item-urls           Also print per-POI map URLs
    -v, --verbose         Debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pypoi import (  # noqa: E402
    BootstrapPipeline,
    Coordinates,
    GeolocationError,
    LocationConsentDeniedError,
    PoiConfig,
    PoiError,
    build_item_map_urls,
)


class SimulatedLocation:
    def __init__(self, coords: Coordinates, failures: int) -> None:
        self._coords = coords
        self._failures = failures

    async def current_position(self) -> Coordinates:
        if self._failures > 0:
            self._failures -= 1
            raise GeolocationError(code=GeolocationError.POSITION_UNAVAILABLE)
        return self._coords


class TerminalDialog:
    async def ask(self, title: str, message: str, buttons: Sequence[str]) -> int | None:
        prompt = "\n".join(
            [f"\n== {title} ==", message, *(f"  [{i + 1}] {label}" for i, label in enumerate(buttons)), "> "]
        )
        answer = (await asyncio.to_thread(input, prompt)).strip()
        if answer.isdigit() and 1 <= int(answer) <= len(buttons):
            return int(answer) - 1
        return None


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the pypoi bootstrap pipeline")
    parser.add_argument("bundle", type=Path, help="Bundled content JSON file")
    parser.add_argument("--locale", default=None, help="Requested locale tag")
    parser.add_argument("--lat", type=float, default=0.0)
    parser.add_argument("--lon", type=float, default=0.0)
    parser.add_argument("--fail-location", type=int, default=0, metavar="N")
    parser.add_argument("--no-sync", action="store_true")
    parser.add_argument("--item-urls", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {"bundle_path": args.bundle}
    if args.locale:
        overrides["locale"] = args.locale
    if args.no_sync:
        overrides["sync_enabled"] = False
    config = PoiConfig.from_env(**overrides)

    location = SimulatedLocation(Coordinates(lat=args.lat, lon=args.lon), args.fail_location)
    async with BootstrapPipeline(config, location, TerminalDialog()) as pipeline:
        store = await pipeline.run()
        result = store.snapshot()
        result.pop("content", None)
        if args.item_urls:
            result["item_map_urls"] = {
                str(poi_id): url
                for poi_id, url in build_item_map_urls(
                    store.get("locale"),
                    store.get("pois"),
                    base_url=config.map_base_url,
                    icon_color=config.map_icon_color,
                ).items()
            }
        return result


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        result = asyncio.run(_run(args))
    except LocationConsentDeniedError:
        print("Location is required; exiting.", file=sys.stderr)
        return 2
    except PoiError as exc:
        print(f"Bootstrap failed: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
