#!/usr/bin/env python3
"""Print Tempest hub broadcasts received on the local network.

Examples::

    python scripts/listen.py                          # every event
    python scripts/listen.py --cache                  # plus cache counters
    python scripts/listen.py --subscribe ST-00084233  # one station only

Options may also come from ``TEMPEST_*`` environment variables; see
``TempestConfig.from_env``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pytempest import TempestConfig, TempestError, TempestListener  # noqa: E402


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Listen for WeatherFlow Tempest UDP broadcasts.",
    )
    parser.add_argument("--address", help="Local address to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="UDP port (default: 50222)")
    parser.add_argument("--cache", action="store_true", help="Cache hubs and stations and print counters")
    parser.add_argument("--subscribe", nargs="+", metavar="SN", help="Only print events from these serial numbers")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.address:
        overrides["bind_address"] = args.address
    if args.port is not None:
        overrides["port"] = args.port
    if args.cache:
        overrides["cache_enabled"] = True
    if args.subscribe:
        overrides["serial_filter"] = frozenset(args.subscribe)

    try:
        config = TempestConfig.from_env(**overrides)
        async with TempestListener(config) as listener:
            print(f"Listening on {config.bind_address}:{listener.local_address[1]}")
            async for event in listener.stream:
                print(f"Event: {event}")
                if listener.cache is not None:
                    print(f"Number of hubs cached: {listener.cache.hub_count}")
                    print(f"Number of stations cached: {listener.cache.station_count}")
    except TempestError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    print("Channel closed", file=sys.stderr)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
