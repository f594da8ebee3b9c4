"""
WebServer class for CLI control of the FastAPI application.
"""
import logging
import os
from typing import Optional

import uvicorn

from settings import PORT, LOG_LEVEL, BIND_ADDRESS
from .app import app

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEBUG_LOG_FILE = 'inbox_brief_debug.log'


def setup_logging(debug: bool = False) -> Optional[str]:
    """Configure the root logger

    Args:
        debug: Log at DEBUG and append to a debug log file as well

    Returns:
        Path of the debug log file, or None when not in debug mode
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else getattr(logging, str(LOG_LEVEL).upper(), logging.INFO))

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if not debug:
        return None

    log_file = os.path.abspath(DEBUG_LOG_FILE)
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    return log_file


class WebServer:
    """Web server wrapper for CLI control"""

    def __init__(self, debug: bool = False, bind_address: Optional[str] = None, port: Optional[int] = None):
        self.server = None
        self.config = None
        self.debug = debug
        self.bind_address = bind_address or BIND_ADDRESS
        self.port = port or PORT

        log_file = setup_logging(debug)
        if log_file:
            logger.info(f"Debug logging enabled - appending to {log_file}")

    def run(self):
        """Run the web server (blocking)"""
        logger.info(f"Starting Inbox Brief on http://{self.bind_address}:{self.port}")
        logger.info("Available endpoints: /auth/login, /auth/logout, /api/gmail/messages, /api/gmail/profile")
        self.config = uvicorn.Config(
            app,
            host=self.bind_address,
            port=self.port,
            log_level="debug" if self.debug else LOG_LEVEL,
            access_log=False  # request middleware already logs
        )
        self.server = uvicorn.Server(self.config)
        self.server.run()

    def stop(self):
        """Stop the web server"""
        if self.server:
            self.server.should_exit = True
