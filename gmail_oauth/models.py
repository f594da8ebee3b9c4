"""Data models for Google OAuth authentication"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .errors import MalformedResponse

# Tokens are treated as expired this long before the provider says so
EXPIRY_BUFFER_SECONDS = 60


@dataclass(frozen=True)
class PkceCodes:
    """PKCE (Proof Key for Code Exchange) codes for OAuth flow

    Attributes:
        code_verifier: Random hex string kept by the client
        code_challenge: SHA256 hash of code_verifier, sent in auth request
    """
    code_verifier: str
    code_challenge: str


@dataclass(frozen=True)
class TokenRecord:
    """OAuth token data for one session

    Records are never edited in place; a refresh produces a new record.

    Attributes:
        access_token: Bearer token for API authentication
        expires_in: Lifetime of the access token in seconds
        refresh_token: Token for refreshing expired access tokens
        id_token: OpenID Connect identity token
        scope: Space separated scopes granted
        token_type: Usually "Bearer"
        created_at_ms: Epoch milliseconds when the record was stored
    """
    access_token: str
    expires_in: int
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None
    scope: Optional[str] = None
    token_type: str = "Bearer"
    created_at_ms: int = 0

    @classmethod
    def from_response(cls, payload: Any, operation: str = "token request") -> "TokenRecord":
        """Build a record from a token endpoint JSON body

        Args:
            payload: Decoded JSON body
            operation: Name used in error messages

        Returns:
            TokenRecord with created_at_ms left at 0 (the store stamps it)

        Raises:
            MalformedResponse: body is not an object or lacks an access token
        """
        if not isinstance(payload, dict):
            raise MalformedResponse(operation, f"expected a JSON object, got {type(payload).__name__}")

        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise MalformedResponse(operation, "missing access_token")

        expires_in = payload.get("expires_in", 3600)
        try:
            expires_in = int(expires_in)
        except (TypeError, ValueError):
            raise MalformedResponse(operation, f"invalid expires_in: {expires_in!r}") from None

        return cls(
            access_token=access_token,
            expires_in=expires_in,
            refresh_token=payload.get("refresh_token") or None,
            id_token=payload.get("id_token") or None,
            scope=payload.get("scope") or None,
            token_type=payload.get("token_type") or "Bearer",
        )

    def stamped(self, created_at_ms: int) -> "TokenRecord":
        """Return a copy carrying the given creation time"""
        return replace(self, created_at_ms=created_at_ms)

    def expires_at_ms(self) -> int:
        """Epoch milliseconds from which the record counts as expired"""
        return self.created_at_ms + (self.expires_in - EXPIRY_BUFFER_SECONDS) * 1000

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage"""
        return {
            "access_token": self.access_token,
            "expires_in": self.expires_in,
            "refresh_token": self.refresh_token,
            "id_token": self.id_token,
            "scope": self.scope,
            "token_type": self.token_type,
            "created_at_ms": self.created_at_ms,
        }


def is_expired(created_at_ms: int, expires_in: int, now_ms: int) -> bool:
    """Check whether a token should be refreshed

    Args:
        created_at_ms: Epoch milliseconds when the token was stored
        expires_in: Token lifetime in seconds
        now_ms: Current epoch milliseconds

    Returns:
        True from EXPIRY_BUFFER_SECONDS before the real expiry onwards
    """
    return now_ms >= created_at_ms + (expires_in - EXPIRY_BUFFER_SECONDS) * 1000


def merge_refreshed_tokens(previous: TokenRecord, refreshed: TokenRecord) -> TokenRecord:
    """Combine a refresh response with the record it replaces

    Google may omit refresh_token on refresh; the old one stays valid then.

    Args:
        previous: Record that was refreshed
        refreshed: Record built from the refresh response

    Returns:
        The refreshed record, carrying the previous refresh token if it had none
    """
    if refreshed.refresh_token:
        return refreshed
    return replace(refreshed, refresh_token=previous.refresh_token)
