"""Entry point for running the BeeTrail API under uvicorn.

Configuration (PORT, HOST, DATABASE_URL, JWT_SECRET, LOG_LEVEL ...) is
read from the environment or a ``.env`` file in the working directory.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from beetrail_api.app.core.config import Settings
from beetrail_api.app.main import create_app


async def main() -> None:
    """Serve the API until interrupted."""
    settings = Settings.from_env()
    app = create_app(settings)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower(), access_log=False)
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
