"""
Request-scoped access to the shared OAuth manager and Gmail client,
plus translation of domain errors into HTTP errors.
"""
import logging
from typing import Optional

import httpx
from fastapi import HTTPException, Request

from gmail_api import GmailClient
from gmail_oauth import (
    AuthenticationRequired,
    ConfigurationError,
    GoogleOAuthManager,
    InboxBriefError,
    MalformedResponse,
    ProviderError,
)
from .cookies import SESSION_COOKIE

logger = logging.getLogger(__name__)


def get_oauth_manager(request: Request) -> GoogleOAuthManager:
    return request.app.state.oauth_manager


def get_http_client(request: Request) -> Optional[httpx.AsyncClient]:
    return request.app.state.http_client


def require_session_id(request: Request) -> str:
    """Session id from the cookie, or 401"""
    session_id = request.cookies.get(SESSION_COOKIE)
    if not session_id:
        raise HTTPException(status_code=401, detail={"error": "Not authenticated"})
    return session_id


def get_gmail_client(request: Request) -> GmailClient:
    """Gmail client bound to the caller's session"""
    return GmailClient(
        get_oauth_manager(request),
        require_session_id(request),
        http_client=get_http_client(request),
    )


def to_http_exception(error: InboxBriefError) -> HTTPException:
    """Map a domain error to the status the web client should see"""
    if isinstance(error, AuthenticationRequired):
        status_code = 401
    elif isinstance(error, ProviderError):
        status_code = error.status_code or 502
    elif isinstance(error, MalformedResponse):
        status_code = 502
    elif isinstance(error, ConfigurationError):
        logger.error(f"Configuration error: {error}")
        status_code = 500
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail={"error": str(error)})
