"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from food_inventory.api.inventory import router as inventory_router
from food_inventory.app_logging import configure_logging
from food_inventory.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting food inventory API",
            extra={"environment": app.state.container.settings.environment},
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(inventory_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
