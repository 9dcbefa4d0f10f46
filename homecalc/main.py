"""
Main FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from homecalc import __version__
from homecalc.api import router as api_router
from homecalc.calculations import CalculatorRegistry, build_default_registry
from homecalc.config import get_settings
from homecalc.db.database import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app(registry: Optional[CalculatorRegistry] = None) -> FastAPI:
    """Build the application around a calculator registry."""
    app = FastAPI(
        title=settings.app_name,
        description="Home buyer loan readiness and affordability calculators",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.registry = registry or build_default_registry(settings.call_to_action())

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()
