"""Command-line entry point: ``python -m pyfindme``.

Boots the tracker (failing fast if the first login does not succeed),
then refreshes the device location periodically while serving the status
sentence over HTTP.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pyfindme.client import FindMeClient
from pyfindme.config import FindMeConfig
from pyfindme.exceptions import FindMeConfigError, FindMeError
from pyfindme.gazetteer import Gazetteer
from pyfindme.resolver import Resolver
from pyfindme.server import start_server
from pyfindme.tracker import LocationTracker

_logger = logging.getLogger("pyfindme")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pyfindme",
        description="Track a Find My device and serve a coarse 'where am I' sentence.",
    )
    parser.add_argument("--gazetteer", help="GeoNames tab-delimited dump (overrides FINDME_GAZETTEER_PATH)")
    parser.add_argument("--device", help="Device name (overrides FINDME_DEVICE_NAME)")
    parser.add_argument("--interval", type=float, help="Seconds between refreshes (overrides FINDME_POLL_INTERVAL)")
    parser.add_argument("--port", type=int, help="Status server port (overrides FINDME_PORT)")
    parser.add_argument("--once", action="store_true", help="Refresh once, print the status and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _load_config(args: argparse.Namespace) -> tuple[FindMeConfig, str]:
    """Build the configuration and return it with the required gazetteer path."""
    overrides: dict[str, object] = {}
    if args.gazetteer:
        overrides["gazetteer_path"] = args.gazetteer
    if args.device:
        overrides["device_name"] = args.device
    if args.interval is not None:
        overrides["poll_interval"] = args.interval
    if args.port is not None:
        overrides["port"] = args.port

    config = FindMeConfig.from_env(**overrides)
    if not config.device_name:
        raise FindMeConfigError("missing required setting: device_name")
    if not config.gazetteer_path:
        raise FindMeConfigError("missing required setting: gazetteer_path")
    return config, config.gazetteer_path


async def _run(config: FindMeConfig, gazetteer_path: str, *, once: bool) -> int:
    resolver = Resolver(Gazetteer.from_file(gazetteer_path))

    async with FindMeClient(config) as client:
        await client.login()
        tracker = LocationTracker(
            client,
            resolver,
            config.device_name,
            default_place=config.default_place,
        )

        if once:
            ok = await tracker.safe_tick()
            print(tracker.get_status_text())
            return 0 if ok else 1

        runner = await start_server(tracker, config.host, config.port)
        try:
            await tracker.run(config.poll_interval)
        finally:
            await runner.cleanup()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config, gazetteer_path = _load_config(args)
        return asyncio.run(_run(config, gazetteer_path, once=args.once))
    except FindMeConfigError as exc:
        _logger.error("Configuration error: %s", exc)
        return 2
    except FindMeError as exc:
        _logger.error("Startup failed: %s", exc)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
