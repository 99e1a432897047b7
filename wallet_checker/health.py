"""HTTP status page served alongside the polling bot.

Hosting platforms probe the process over HTTP; this answers GET / with a
static page while the bot runs long polling on the same event loop.
"""

import logging

from aiohttp import web

from .bot.messages import HEALTH_PAGE

logger = logging.getLogger(__name__)


async def status_page(request: web.Request) -> web.Response:
    return web.Response(text=HEALTH_PAGE, content_type="text/html", charset="utf-8")


def create_health_app() -> web.Application:
    """Build the aiohttp application with the status route."""
    app = web.Application()
    app.router.add_get("/", status_page)
    return app


class HealthServer:
    """Starts and stops the status page on the bot's event loop."""

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None

    async def start(self) -> None:
        if self._runner is not None:
            return
        runner = web.AppRunner(create_health_app())
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()
        self._runner = runner
        logger.info(f"Health page listening on http://{self.host}:{self.port}")

    async def stop(self) -> None:
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        logger.info("Health page stopped")
