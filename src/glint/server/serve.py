"""Run an App under the pounce ASGI server.

Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``), but
``App.run()`` has a live object, so ``pounce.Server`` is used directly
with the ASGI callable.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from glint.app import App

logger = logging.getLogger("glint.server")


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """Start pounce with *app* and block until shutdown.

    Args:
        app: The glint App (an ASGI callable).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count. Push streams keep one connection per
            client open, so size this for concurrent viewers.
        reload: Restart on source changes (development only).
        log_level: Log level for pounce and the ``glint.*`` loggers.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    logging.getLogger("glint").setLevel(log_level.upper())

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        log_level=log_level,
    )
    logger.info("Serving %d route(s) on http://%s:%d", len(app.routes), host, port)
    Server(config, app).run()
