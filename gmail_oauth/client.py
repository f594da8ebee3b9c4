"""Google OAuth client composing authorization, exchange and refresh"""

from typing import Optional, Sequence

import httpx

from .authorization import DEFAULT_SCOPES, OAuthClientConfig, build_authorization_url
from .models import TokenRecord
from .token_exchange import exchange_code_for_tokens
from .token_refresh import refresh_access_token


class GoogleOAuthClient:
    """OAuth PKCE flow against Google's endpoints

    This class bundles the client registration and an optional shared
    HTTP client so callers only pass flow-specific values.
    """

    def __init__(
        self,
        config: Optional[OAuthClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the OAuth client

        Args:
            config: Client registration (default: read from settings)
            http_client: Shared HTTP client (default: one per request)
        """
        self.config = config or OAuthClientConfig.from_settings()
        self.http_client = http_client

    def build_authorization_url(
        self,
        state: str,
        code_challenge: str,
        scopes: Sequence[str] = DEFAULT_SCOPES,
        access_type: str = "offline",
        prompt_consent: bool = True,
    ) -> str:
        """Construct the authorize URL for a login attempt"""
        return build_authorization_url(
            self.config,
            state,
            code_challenge,
            scopes=scopes,
            access_type=access_type,
            prompt_consent=prompt_consent,
        )

    async def exchange_code(self, code: str, code_verifier: str) -> TokenRecord:
        """Exchange an authorization code plus PKCE verifier for tokens"""
        return await exchange_code_for_tokens(self.config, code, code_verifier, self.http_client)

    async def refresh(self, refresh_token: str) -> TokenRecord:
        """Get a new access token; refresh_token may be None in the result"""
        return await refresh_access_token(self.config, refresh_token, self.http_client)
