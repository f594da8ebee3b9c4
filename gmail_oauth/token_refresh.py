"""OAuth token refresh for Google authentication"""

import logging
from typing import Optional

import httpx

from .authorization import OAuthClientConfig
from .models import TokenRecord
from .token_exchange import post_token_request


logger = logging.getLogger(__name__)


async def refresh_access_token(
    config: OAuthClientConfig,
    refresh_token: str,
    http_client: Optional[httpx.AsyncClient] = None,
) -> TokenRecord:
    """Refresh an expired Google access token

    The returned record's refresh_token is None when Google did not rotate
    it; carrying the old one forward is the caller's job
    (see merge_refreshed_tokens).

    Args:
        config: OAuth client registration
        refresh_token: Refresh token from previous authentication
        http_client: Optional shared HTTP client

    Returns:
        TokenRecord with the new access token

    Raises:
        ConfigurationError: client id or secret missing
        ProviderError: token endpoint rejected the refresh
        MalformedResponse: token endpoint answered garbage
    """
    config.require("client_id", "client_secret")

    data = {
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    }

    logger.info("Attempting to refresh Google OAuth tokens...")
    tokens = await post_token_request(config.token_url, data, "Google token refresh", http_client)
    logger.info("Successfully refreshed Google OAuth tokens")
    return tokens
