"""Entry point for the Event Booking API.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``5000``); see ``event_booking_api/app/core/config.py`` for every
supported variable.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from event_booking_api.app.core.config import settings
from event_booking_api.app.main import app


async def main() -> None:
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Serving on http://%s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
