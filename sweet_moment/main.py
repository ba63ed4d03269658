"""
Application entry point for the Sweet Moment pricing API.

Creates the FastAPI app, wires CORS, and registers the pricing and cart
routers under /api/v1 and at the root.

Usage:
    uvicorn sweet_moment.main:app --reload
"""

# Load environment variables FIRST, before any module reads config
from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS
from .logging_config import setup_logging
from .routes import cart_router, pricing_router, products_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Create the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    setup_logging()

    app = FastAPI(
        title="Sweet Moment Pricing API",
        description="Product configuration, price previews and cart state",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_v1 = APIRouter(prefix="/api/v1")
    for router in (pricing_router, products_router, cart_router):
        api_v1.include_router(router)
        # Also mount at root for backward compatibility
        app.include_router(router)
    app.include_router(api_v1)

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    logger.info("Application created")
    return app


app = create_app()
