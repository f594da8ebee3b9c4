"""
Inbox Brief web server package.

Exposes the OAuth login flow and Gmail endpoints over FastAPI, with
sessions carried in an HTTP-only cookie.
"""
from .app import app, create_app
from .server import WebServer, setup_logging

__version__ = "1.0.0"

__all__ = [
    'app',
    'create_app',
    'WebServer',
    'setup_logging',
]
