"""OAuth token lifecycle manager for Google sessions"""

import asyncio
import logging
import time
from typing import Callable, Dict, Optional

from .client import GoogleOAuthClient
from .errors import RefreshUnavailable, SessionNotFound
from .models import is_expired, merge_refreshed_tokens
from .storage import InMemoryTokenStore, TokenStore


logger = logging.getLogger(__name__)


class GoogleOAuthManager:
    """Manages per-session Google OAuth tokens with automatic refresh

    ensure_access_token is the only way callers obtain an access token;
    it refreshes stale tokens before handing them out.
    """

    def __init__(
        self,
        storage: Optional[TokenStore] = None,
        oauth_client: Optional[GoogleOAuthClient] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize OAuth manager

        Args:
            storage: Token store (creates an empty in-memory store if None)
            oauth_client: Client for token endpoint calls (creates new if None)
            clock: Returns the current time in epoch seconds (default: time.time)
        """
        self.storage = storage if storage is not None else InMemoryTokenStore(clock=clock)
        self.oauth_client = oauth_client or GoogleOAuthClient()
        self._clock = clock or time.time
        self._locks: Dict[str, asyncio.Lock] = {}

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        return lock

    def _prune_locks(self) -> None:
        # Drop locks of sessions removed from the store without logout().
        # The lock table is thus bounded by the store, which has no expiry of its own.
        for session_id, lock in list(self._locks.items()):
            if not lock.locked() and self.storage.get(session_id) is None:
                del self._locks[session_id]

    async def ensure_access_token(self, session_id: str) -> str:
        """Get a valid access token for a session

        Refreshes the token when it is within the expiry buffer. Concurrent
        calls for the same session are serialized, so a stale token triggers
        a single refresh and later callers reuse its result.

        Args:
            session_id: Session identifier from the session cookie

        Returns:
            Valid access token

        Raises:
            SessionNotFound: no tokens for this session
            RefreshUnavailable: token expired and no refresh token stored
            ProviderError: refresh rejected by Google
            MalformedResponse: refresh response unusable
        """
        async with self._lock_for(session_id):
            tokens = self.storage.get(session_id)
            if tokens is None:
                logger.debug(f"No tokens for session {session_id[:8]}...")
                self._locks.pop(session_id, None)
                raise SessionNotFound(session_id)

            if not is_expired(tokens.created_at_ms, tokens.expires_in, self._now_ms()):
                return tokens.access_token

            if not tokens.refresh_token:
                logger.error("Access token expired and no refresh token available")
                raise RefreshUnavailable(session_id)

            logger.info(f"Access token for session {session_id[:8]}... expired, attempting refresh...")
            refreshed = await self.oauth_client.refresh(tokens.refresh_token)
            merged = merge_refreshed_tokens(tokens, refreshed)

            # A logout during the refresh wins; do not resurrect the session
            if self.storage.get(session_id) is None:
                logger.info(f"Session {session_id[:8]}... was logged out during refresh")
                raise SessionNotFound(session_id)

            stored = self.storage.put(session_id, merged)
            return stored.access_token

    async def complete_login(self, code: str, code_verifier: str) -> str:
        """Finish the OAuth callback and open a session

        Args:
            code: Authorization code from the callback
            code_verifier: PKCE verifier from the transient cookie

        Returns:
            New session id

        Raises:
            ConfigurationError, ProviderError, MalformedResponse: from the exchange
        """
        tokens = await self.oauth_client.exchange_code(code, code_verifier)
        self._prune_locks()
        session_id = self.storage.create_session_id()
        self.storage.put(session_id, tokens)
        logger.info(f"Created session {session_id[:8]}...")
        return session_id

    def logout(self, session_id: str) -> None:
        """Drop a session's tokens; unknown sessions are ignored"""
        self.storage.delete(session_id)
        self._locks.pop(session_id, None)

    def is_authenticated(self, session_id: Optional[str]) -> bool:
        """Check whether a session has tokens (they may still need a refresh)"""
        if not session_id:
            return False
        return self.storage.get(session_id) is not None
