from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from gmail_oauth import ConfigurationError, DEFAULT_SCOPES, GoogleOAuthClient, build_authorization_url
from tests.helpers import AUTH_BASE, make_config


def query(url: str) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(urlsplit(url).query).items()}


def test_authorization_url_carries_pkce_and_client_fields() -> None:
    url = build_authorization_url(make_config(), state="state-abc", code_challenge="challenge-xyz")

    assert url.startswith(AUTH_BASE + "?")
    params = query(url)
    assert params == {
        "client_id": "client-123.apps.example.test",
        "redirect_uri": "http://localhost:8080/auth/callback",
        "response_type": "code",
        "scope": " ".join(DEFAULT_SCOPES),
        "state": "state-abc",
        "access_type": "offline",
        "include_granted_scopes": "true",
        "code_challenge": "challenge-xyz",
        "code_challenge_method": "S256",
        "prompt": "consent",
    }


def test_authorization_url_is_deterministic() -> None:
    config = make_config()

    first = build_authorization_url(config, "s", "c")
    second = build_authorization_url(config, "s", "c")

    assert first == second


def test_authorization_url_options() -> None:
    url = build_authorization_url(
        make_config(),
        state="s",
        code_challenge="c",
        scopes=["openid", "https://www.googleapis.com/auth/gmail.modify"],
        access_type="online",
        prompt_consent=False,
    )

    params = query(url)
    assert params["scope"] == "openid https://www.googleapis.com/auth/gmail.modify"
    assert params["access_type"] == "online"
    assert "prompt" not in params
    assert params["code_challenge_method"] == "S256"


@pytest.mark.parametrize("missing, message", [
    ("client_id", "Missing GOOGLE_CLIENT_ID"),
    ("redirect_uri", "Missing GOOGLE_REDIRECT_URI"),
])
def test_authorization_url_requires_client_settings(missing: str, message: str) -> None:
    config = make_config(**{missing: None})

    with pytest.raises(ConfigurationError, match=message):
        build_authorization_url(config, "s", "c")


def test_authorization_url_does_not_need_client_secret() -> None:
    client = GoogleOAuthClient(make_config(client_secret=None))

    assert client.build_authorization_url("s", "c").startswith(AUTH_BASE)
