"""Entry point for serving the Address Directory API.

Configuration (database path, bind address, log level) is read from
environment variables; see ``address_directory/app/core/config.py``
for the supported names.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from address_directory.app.core.config import settings
from address_directory.app.main import app


async def run_api() -> None:
    """Serve the API with Uvicorn on ``settings.host``:``settings.port``."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


async def main() -> None:
    try:
        await run_api()
    except Exception:
        logging.exception("Address Directory API stopped with an error")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
