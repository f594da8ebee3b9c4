"""
Endpoint handlers for the web server.
"""
from .health import router as health_router
from .auth import router as auth_router
from .gmail import router as gmail_router

__all__ = [
    'health_router',
    'auth_router',
    'gmail_router',
]
