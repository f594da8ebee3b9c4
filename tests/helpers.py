from __future__ import annotations

import base64
import json
from typing import Any, Callable
from urllib.parse import parse_qs

import httpx

from gmail_oauth import GoogleOAuthClient, GoogleOAuthManager, InMemoryTokenStore, OAuthClientConfig

TOKEN_URL = "https://oauth.example.test/token"
AUTH_BASE = "https://accounts.example.test/auth"
GMAIL_BASE = "https://gmail.example.test/gmail/v1/users/me"


class FakeClock:
    """Settable clock returning epoch seconds"""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_config(**overrides: Any) -> OAuthClientConfig:
    values = {
        "client_id": "client-123.apps.example.test",
        "client_secret": "shh-secret",
        "redirect_uri": "http://localhost:8080/auth/callback",
        "auth_base": AUTH_BASE,
        "token_url": TOKEN_URL,
    }
    values.update(overrides)
    return OAuthClientConfig(**values)


def token_payload(
    access_token: str = "access-1",
    expires_in: int = 3600,
    refresh_token: str | None = "refresh-1",
    **extra: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "access_token": access_token,
        "expires_in": expires_in,
        "token_type": "Bearer",
        "scope": "openid email",
    }
    if refresh_token is not None:
        payload["refresh_token"] = refresh_token
    payload.update(extra)
    return payload


def form_fields(request: httpx.Request) -> dict[str, str]:
    parsed = parse_qs(request.content.decode("utf-8"))
    return {key: values[0] for key, values in parsed.items()}


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(data).encode("utf-8"),
                          headers={"Content-Type": "application/json"})


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_manager(
    handler: Callable[[httpx.Request], httpx.Response],
    clock: FakeClock | None = None,
) -> GoogleOAuthManager:
    clock = clock or FakeClock()
    oauth_client = GoogleOAuthClient(make_config(), http_client=mock_client(handler))
    return GoogleOAuthManager(
        storage=InMemoryTokenStore(clock=clock),
        oauth_client=oauth_client,
        clock=clock,
    )


def b64url(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).rstrip(b"=").decode("ascii")


def leaf(mime_type: str, text: str | None) -> dict[str, Any]:
    body: dict[str, Any] = {"size": len(text or "")}
    if text is not None:
        body["data"] = b64url(text)
    return {"mimeType": mime_type, "body": body}


def multipart(mime_type: str, *parts: dict[str, Any], headers: list[dict[str, str]] | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"mimeType": mime_type, "body": {"size": 0}, "parts": list(parts)}
    if headers is not None:
        node["headers"] = headers
    return node
