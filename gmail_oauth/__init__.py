"""Google OAuth authentication module

Provides the OAuth 2.0 authorization code flow with PKCE for Gmail access:
authorization URL construction, code exchange, token refresh and
per-session token storage.
"""

from .models import PkceCodes, TokenRecord, is_expired, merge_refreshed_tokens
from .errors import (
    InboxBriefError,
    ConfigurationError,
    AuthenticationRequired,
    SessionNotFound,
    RefreshUnavailable,
    ProviderError,
    MalformedResponse,
    PerItemFetchError,
)
from .pkce import random_verifier, challenge_from_verifier, create_pkce_pair, create_state
from .authorization import DEFAULT_SCOPES, OAuthClientConfig, build_authorization_url
from .token_exchange import exchange_code_for_tokens
from .token_refresh import refresh_access_token
from .client import GoogleOAuthClient
from .storage import TokenStore, InMemoryTokenStore, create_session_id
from .token_manager import GoogleOAuthManager

__all__ = [
    "PkceCodes",
    "TokenRecord",
    "is_expired",
    "merge_refreshed_tokens",
    "InboxBriefError",
    "ConfigurationError",
    "AuthenticationRequired",
    "SessionNotFound",
    "RefreshUnavailable",
    "ProviderError",
    "MalformedResponse",
    "PerItemFetchError",
    "random_verifier",
    "challenge_from_verifier",
    "create_pkce_pair",
    "create_state",
    "DEFAULT_SCOPES",
    "OAuthClientConfig",
    "build_authorization_url",
    "exchange_code_for_tokens",
    "refresh_access_token",
    "GoogleOAuthClient",
    "TokenStore",
    "InMemoryTokenStore",
    "create_session_id",
    "GoogleOAuthManager",
]
