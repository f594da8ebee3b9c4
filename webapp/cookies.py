"""
Cookie names and helpers for the OAuth round-trip and the session.

All cookies are HTTP-only, SameSite=Lax and scoped to path "/".
"""
from fastapi import Response

import settings

STATE_COOKIE = "oauth_state"
VERIFIER_COOKIE = "oauth_verifier"
SESSION_COOKIE = "session_id"
COOKIE_PATH = "/"


def _set_cookie(response: Response, name: str, value: str, max_age: int) -> None:
    response.set_cookie(
        name,
        value,
        max_age=max_age,
        path=COOKIE_PATH,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )


def _delete_cookie(response: Response, name: str) -> None:
    response.delete_cookie(
        name,
        path=COOKIE_PATH,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )


def set_login_cookies(response: Response, state: str, code_verifier: str) -> None:
    """Carry state and PKCE verifier through the provider redirect"""
    _set_cookie(response, STATE_COOKIE, state, settings.OAUTH_COOKIE_MAX_AGE)
    _set_cookie(response, VERIFIER_COOKIE, code_verifier, settings.OAUTH_COOKIE_MAX_AGE)


def clear_login_cookies(response: Response) -> None:
    _delete_cookie(response, STATE_COOKIE)
    _delete_cookie(response, VERIFIER_COOKIE)


def set_session_cookie(response: Response, session_id: str) -> None:
    _set_cookie(response, SESSION_COOKIE, session_id, settings.SESSION_COOKIE_MAX_AGE)


def clear_session_cookie(response: Response) -> None:
    _delete_cookie(response, SESSION_COOKIE)
