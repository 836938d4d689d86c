"""
SmartShop Sandbox API - FastAPI Application

Serves both path conventions of the SmartShop backend from an in-memory store.
Environment-agnostic: configuration reads from settings (.env file).
"""

import logging
from typing import Optional

from fastapi import FastAPI

from sandbox_api.routers import auth, catalog, reports, social, version
from sandbox_api.store import SandboxStore, seed_store
from smartshop import __version__
from smartshop.logging_setup import setup_logging
from smartshop.settings import get_settings

cfg = get_settings()
logger = logging.getLogger(__name__)


def create_app(store: Optional[SandboxStore] = None) -> FastAPI:
    """
    Application factory for the sandbox backend.

    Args:
        store: Backend state to serve; a freshly seeded store when omitted

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="SmartShop Sandbox API",
        description="In-memory SmartShop backend for development and tests",
        version=__version__,
    )
    app.state.store = store if store is not None else seed_store()

    # catalog first: apps/featured must win over apps/{app_id}
    app.include_router(catalog.router, tags=["catalog"])
    app.include_router(social.router, tags=["social"])
    app.include_router(reports.router, tags=["reports"])
    app.include_router(auth.router, tags=["auth"])
    app.include_router(version.router, tags=["version"])

    @app.get("/")
    async def root():
        """Root endpoint - API info"""
        return {
            "name": "SmartShop Sandbox API",
            "version": __version__,
            "environment": cfg.env,
            "status": "running",
            "docs": "/docs",
        }

    logger.info(f"Sandbox application created (env={cfg.env})")
    return app


if __name__ == "__main__":
    import uvicorn

    setup_logging()
    logger.info(f"Starting sandbox on {cfg.sandbox_host}:{cfg.sandbox_port}")
    logger.info(f"Reload: {cfg.sandbox_reload}")

    uvicorn.run(
        "sandbox_api.main:create_app",
        factory=True,
        host=cfg.sandbox_host,
        port=cfg.sandbox_port,
        reload=cfg.sandbox_reload,
        log_level=cfg.log_level.lower(),
    )
