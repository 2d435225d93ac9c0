"""Minimal aiohttp application exposing the status sentence."""

from __future__ import annotations

import logging

from aiohttp import web

from pyfindme.tracker import LocationTracker

_logger = logging.getLogger(__name__)

TRACKER_KEY: web.AppKey[LocationTracker] = web.AppKey("tracker", LocationTracker)


async def _status(request: web.Request) -> web.Response:
    tracker = request.app[TRACKER_KEY]
    return web.Response(text=tracker.get_status_text())


def create_app(tracker: LocationTracker) -> web.Application:
    """Build the status application; ``GET /`` returns plain text."""
    app = web.Application()
    app[TRACKER_KEY] = tracker
    app.router.add_get("/", _status)
    return app


async def start_server(tracker: LocationTracker, host: str, port: int) -> web.AppRunner:
    """Start serving and return the runner; call ``runner.cleanup()`` to stop."""
    runner = web.AppRunner(create_app(tracker))
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    _logger.info("Serving status on %s:%d", host, port)
    return runner
