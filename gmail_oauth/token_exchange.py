"""OAuth token exchange for Google authentication"""

import logging
from typing import Any, Dict, Optional

import httpx

import settings
from .authorization import OAuthClientConfig
from .errors import MalformedResponse, ProviderError
from .models import TokenRecord


logger = logging.getLogger(__name__)


def _default_timeout() -> httpx.Timeout:
    return httpx.Timeout(settings.REQUEST_TIMEOUT, connect=settings.CONNECT_TIMEOUT)


async def post_token_request(
    token_url: str,
    data: Dict[str, str],
    operation: str,
    http_client: Optional[httpx.AsyncClient] = None,
) -> TokenRecord:
    """POST a form to the token endpoint and parse the token record

    Args:
        token_url: Token endpoint URL
        data: Form fields
        operation: Name used in logs and error messages
        http_client: Shared client (a short-lived one is created if None)

    Returns:
        Parsed TokenRecord (not yet stamped)

    Raises:
        ProviderError: non-2xx status or transport failure
        MalformedResponse: body is not a usable token JSON object
    """
    headers = {"Content-Type": "application/x-www-form-urlencoded"}

    try:
        if http_client is None:
            async with httpx.AsyncClient(timeout=_default_timeout()) as client:
                response = await client.post(token_url, data=data, headers=headers)
        else:
            response = await http_client.post(token_url, data=data, headers=headers)
    except httpx.TimeoutException as e:
        logger.error(f"{operation} timed out: {e}")
        raise ProviderError(None, f"timed out: {e}", operation) from e
    except httpx.RequestError as e:
        logger.error(f"{operation} request failed: {e}")
        raise ProviderError(None, str(e), operation) from e

    logger.debug(f"{operation} response status: {response.status_code}")

    if not response.is_success:
        logger.error(f"{operation} failed with status {response.status_code}: {response.text}")
        raise ProviderError(response.status_code, response.text, operation)

    try:
        payload: Any = response.json()
    except ValueError as e:
        logger.error(f"Failed to parse {operation} response: {e}")
        raise MalformedResponse(operation, str(e)) from e

    return TokenRecord.from_response(payload, operation)


async def exchange_code_for_tokens(
    config: OAuthClientConfig,
    code: str,
    code_verifier: str,
    http_client: Optional[httpx.AsyncClient] = None,
) -> TokenRecord:
    """Exchange authorization code for OAuth tokens

    Args:
        config: OAuth client registration
        code: Authorization code from OAuth callback
        code_verifier: PKCE verifier matching the challenge sent at login
        http_client: Optional shared HTTP client

    Returns:
        TokenRecord with tokens (created_at_ms unset)

    Raises:
        ConfigurationError: client id, secret or redirect URI missing
        ProviderError: token endpoint rejected the code
        MalformedResponse: token endpoint answered garbage
    """
    config.require("client_id", "client_secret", "redirect_uri")

    data = {
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "code": code,
        "code_verifier": code_verifier,
        "grant_type": "authorization_code",
        "redirect_uri": config.redirect_uri,
    }

    logger.info(f"Exchanging authorization code for tokens at {config.token_url}")
    tokens = await post_token_request(config.token_url, data, "Google token exchange", http_client)
    logger.info("Successfully exchanged authorization code for tokens")
    return tokens
