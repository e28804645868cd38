"""
Main application entry point.
Initializes the FastAPI app and the backing store connections.
"""
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from crypto_gateway.api import create_app
from crypto_gateway.config import settings
from crypto_gateway.database import engine, init_db

# Configure logging for stdout/stderr collectors
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Creates the reference schema and releases both connection pools.
    """
    logger.info("Starting Crypto Market Data Gateway...")

    try:
        init_db()
        logger.info("Application started successfully")
        yield
    except Exception as e:
        logger.error(f"Startup failed: {e}", exc_info=True)
        raise
    finally:
        logger.info("Shutting down Crypto Market Data Gateway...")
        app.state.dispatcher.datastore.close()
        engine.dispose()
        logger.info("Shutdown complete")


app = create_app()
app.router.lifespan_context = lifespan


def main():
    """Run the application."""
    logger.info(
        "Configuration loaded",
        extra={
            "host": settings.host,
            "port": settings.port,
            "log_level": settings.log_level,
            "redis_host": settings.redis_host,
            "redis_max_connections": settings.redis_max_connections,
            "db_pool_size": settings.db_pool_size,
            "db_max_overflow": settings.db_max_overflow,
            "db_pool_timeout_seconds": settings.db_pool_timeout_seconds,
            "token_errors_degrade": settings.token_errors_degrade,
        },
    )

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
        access_log=True,
    )


if __name__ == "__main__":
    main()
