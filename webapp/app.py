"""
FastAPI application initialization and configuration.
"""
import logging
from typing import Optional

import httpx
from fastapi import FastAPI

from gmail_oauth import GoogleOAuthManager
from .middleware import log_requests_middleware
from .endpoints import (
    auth_router,
    gmail_router,
    health_router,
)

logger = logging.getLogger(__name__)


def create_app(
    oauth_manager: Optional[GoogleOAuthManager] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the web application

    Args:
        oauth_manager: Token lifecycle manager (new in-memory one if None)
        http_client: Shared client for Gmail calls (one per call if None)

    Returns:
        Configured FastAPI app; sessions live on app.state.oauth_manager
    """
    app = FastAPI(title="Inbox Brief", version="1.0.0")
    app.state.oauth_manager = oauth_manager or GoogleOAuthManager()
    app.state.http_client = http_client

    # Add middleware
    app.middleware("http")(log_requests_middleware)

    # Register routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(gmail_router)

    logger.debug("FastAPI application initialized with all routers and middleware")
    return app


app = create_app()
