"""
OAuth login, callback and logout endpoints.
"""
import logging
import secrets

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import RedirectResponse

from gmail_oauth import ConfigurationError, InboxBriefError, create_pkce_pair, create_state
from ..cookies import (
    SESSION_COOKIE,
    STATE_COOKIE,
    VERIFIER_COOKIE,
    clear_login_cookies,
    clear_session_cookie,
    set_login_cookies,
    set_session_cookie,
)
from ..dependencies import get_oauth_manager, to_http_exception

logger = logging.getLogger(__name__)
router = APIRouter()

HOME_URL = "/"


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=400, detail={"error": message})


@router.get("/auth/login")
async def login(request: Request):
    """Start the OAuth flow: remember state + verifier, redirect to Google"""
    oauth_manager = get_oauth_manager(request)
    state = create_state()
    pkce = create_pkce_pair()

    try:
        url = oauth_manager.oauth_client.build_authorization_url(state, pkce.code_challenge)
    except ConfigurationError as e:
        raise to_http_exception(e)

    response = RedirectResponse(url, status_code=302)
    set_login_cookies(response, state, pkce.code_verifier)
    return response


@router.get("/auth/callback")
async def auth_callback(request: Request):
    """Finish the OAuth flow and open a session"""
    params = request.query_params
    error = params.get("error")
    code = params.get("code")
    incoming_state = params.get("state")

    if error:
        logger.error(f"OAuth provider returned error: {error}")
        raise _bad_request(error)
    if not code or not incoming_state:
        logger.error(f"Missing code or state (has_code={bool(code)}, has_state={bool(incoming_state)})")
        raise _bad_request("Missing code or state")

    cookie_state = request.cookies.get(STATE_COOKIE)
    code_verifier = request.cookies.get(VERIFIER_COOKIE)
    if not cookie_state or not code_verifier:
        logger.error(
            f"Missing cookies (has_state_cookie={bool(cookie_state)}, has_verifier={bool(code_verifier)})"
        )
        raise _bad_request("OAuth state or verifier cookie missing/expired")
    if not secrets.compare_digest(cookie_state, incoming_state):
        logger.error("OAuth state mismatch")
        raise _bad_request("State mismatch")

    try:
        session_id = await get_oauth_manager(request).complete_login(code, code_verifier)
    except InboxBriefError as e:
        logger.error(f"Token exchange error: {e}")
        raise HTTPException(status_code=500, detail={"error": str(e)})

    response = RedirectResponse(HOME_URL, status_code=302)
    clear_login_cookies(response)
    set_session_cookie(response, session_id)
    return response


@router.get("/auth/logout")
async def logout(request: Request):
    """End the session and drop the cookie"""
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        get_oauth_manager(request).logout(session_id)

    response = RedirectResponse(HOME_URL, status_code=302)
    clear_session_cookie(response)
    return response


@router.get("/")
@router.get("/auth/status")
async def auth_status(request: Request):
    """Whether the caller has a session (without exposing tokens)"""
    session_id = request.cookies.get(SESSION_COOKIE)
    return {"authenticated": get_oauth_manager(request).is_authenticated(session_id)}
