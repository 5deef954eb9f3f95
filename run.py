"""Entry point for the Song Catalog API server.

This script launches the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Host, port and log level are taken from the application settings
(``API_HOST``, ``API_PORT``, ``LOG_LEVEL`` environment variables).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from song_catalog_api.app.core.config import settings
from song_catalog_api.app.main import create_app


async def run_api() -> None:
    """Serve a freshly created application until interrupted."""
    config = Config(
        app=create_app(),
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


async def main() -> None:
    logging.getLogger(__name__).info(
        "Starting %s on %s:%s", settings.project_name, settings.api_host, settings.api_port
    )
    await run_api()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
