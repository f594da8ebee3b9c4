"""CLI package for Inbox Brief

Starts the web server and reports the effective configuration.
"""

from cli.main import main

__all__ = [
    "main",
]
