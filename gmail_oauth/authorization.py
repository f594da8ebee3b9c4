"""OAuth authorization URL construction for Google"""

from dataclasses import dataclass
from typing import Optional, Sequence
from urllib.parse import urlencode

import settings
from .errors import ConfigurationError


DEFAULT_SCOPES = (
    "openid",
    "email",
    "profile",
    "https://www.googleapis.com/auth/gmail.readonly",
)


@dataclass(frozen=True)
class OAuthClientConfig:
    """Google OAuth client registration

    Attributes:
        client_id: OAuth client id
        client_secret: OAuth client secret (token endpoint only)
        redirect_uri: Registered callback URL
        auth_base: Authorization endpoint
        token_url: Token endpoint
    """
    client_id: Optional[str]
    client_secret: Optional[str]
    redirect_uri: Optional[str]
    auth_base: str = settings.GOOGLE_AUTH_BASE
    token_url: str = settings.GOOGLE_TOKEN_URL

    @classmethod
    def from_settings(cls) -> "OAuthClientConfig":
        """Build the config from environment / .env settings"""
        return cls(
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            redirect_uri=settings.GOOGLE_REDIRECT_URI,
            auth_base=settings.GOOGLE_AUTH_BASE,
            token_url=settings.GOOGLE_TOKEN_URL,
        )

    def require(self, *fields: str) -> None:
        """Fail fast when any of the named fields is unset

        Raises:
            ConfigurationError: naming the first missing setting
        """
        for field in fields:
            if not getattr(self, field):
                raise ConfigurationError(f"Missing GOOGLE_{field.upper()}")


def build_authorization_url(
    config: OAuthClientConfig,
    state: str,
    code_challenge: str,
    scopes: Sequence[str] = DEFAULT_SCOPES,
    access_type: str = "offline",
    prompt_consent: bool = True,
) -> str:
    """Construct the Google authorize URL with PKCE

    Args:
        config: OAuth client registration
        state: Opaque CSRF value echoed back on the callback
        code_challenge: S256 challenge of the PKCE verifier
        scopes: Scopes to request
        access_type: "offline" to receive a refresh token, or "online"
        prompt_consent: Force the consent screen (needed for a new refresh token)

    Returns:
        Full authorization URL

    Raises:
        ConfigurationError: client id or redirect URI missing
    """
    config.require("client_id", "redirect_uri")

    params = {
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "response_type": "code",
        "scope": " ".join(scopes),
        "state": state,
        "access_type": access_type,
        "include_granted_scopes": "true",
        "code_challenge": code_challenge,
        "code_challenge_method": "S256",
    }
    if prompt_consent:
        params["prompt"] = "consent"

    return f"{config.auth_base}?{urlencode(params)}"
