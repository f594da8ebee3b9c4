"""Session token storage for Google OAuth"""

import logging
import secrets
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from .models import TokenRecord


logger = logging.getLogger(__name__)


def create_session_id() -> str:
    """Generate an opaque session identifier (16 random bytes, hex)"""
    return secrets.token_hex(16)


class TokenStore(ABC):
    """Maps session ids to token records

    Implementations replace whole records on put; they never merge.
    """

    def create_session_id(self) -> str:
        """Return a fresh session id, independent of any token data"""
        return create_session_id()

    @abstractmethod
    def put(self, session_id: str, tokens: TokenRecord) -> TokenRecord:
        """Store tokens under a session, stamping the creation time

        Args:
            session_id: Session identifier
            tokens: Token record to store (its created_at_ms is overwritten)

        Returns:
            The record as stored
        """

    @abstractmethod
    def get(self, session_id: str) -> Optional[TokenRecord]:
        """Return the stored record, or None"""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove a session; deleting an unknown id is not an error"""

    @abstractmethod
    def clear(self) -> None:
        """Remove every session"""


class InMemoryTokenStore(TokenStore):
    """Process-wide in-memory token store

    Starts empty and loses everything on restart.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """Initialize token storage

        Args:
            clock: Returns the current time in epoch seconds (default: time.time)
        """
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._records: Dict[str, TokenRecord] = {}

    def now_ms(self) -> int:
        """Current time in epoch milliseconds according to the store clock"""
        return int(self._clock() * 1000)

    def put(self, session_id: str, tokens: TokenRecord) -> TokenRecord:
        record = tokens.stamped(self.now_ms())
        with self._lock:
            self._records[session_id] = record
        logger.debug(f"Stored tokens for session {session_id[:8]}...")
        return record

    def get(self, session_id: str) -> Optional[TokenRecord]:
        with self._lock:
            return self._records.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            removed = self._records.pop(session_id, None)
        if removed is not None:
            logger.debug(f"Deleted session {session_id[:8]}...")

    def clear(self) -> None:
        with self._lock:
            count = len(self._records)
            self._records.clear()
        logger.info(f"Cleared {count} session(s)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._records
