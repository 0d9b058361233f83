"""Entry point for the Lesson Booking API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker or a process
manager where you only specify a single Python file to run.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``3000``).  See
``lesson_booking_api/app/core/config.py`` for the other settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from lesson_booking_api.app.core.config import settings
from lesson_booking_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server running on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
