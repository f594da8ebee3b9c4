"""Data models for Gmail message resources"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from gmail_oauth.errors import PerItemFetchError


@dataclass(frozen=True)
class MessagePart:
    """One node of a Gmail message payload tree

    A node with children is a multipart container; a node without
    children is a leaf that may carry base64url body data.

    Attributes:
        mime_type: Declared MIME type, lowercased ("" when absent)
        data: base64url body data, if inline
        parts: Child nodes in document order
        headers: (name, value) pairs in original order
    """
    mime_type: str = ""
    data: Optional[str] = None
    parts: Tuple["MessagePart", ...] = ()
    headers: Tuple[Tuple[str, str], ...] = ()

    @property
    def is_multipart(self) -> bool:
        return bool(self.parts)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "MessagePart":
        """Parse a Gmail API payload dict (missing fields become empty)"""
        if not isinstance(payload, dict):
            return cls()

        body = payload.get("body") or {}
        data = body.get("data") if isinstance(body, dict) else None

        raw_parts = payload.get("parts") or []
        parts = tuple(cls.from_dict(p) for p in raw_parts if isinstance(p, dict))

        headers = tuple(
            (str(h.get("name", "")), str(h.get("value", "")))
            for h in (payload.get("headers") or [])
            if isinstance(h, dict)
        )

        return cls(
            mime_type=str(payload.get("mimeType") or "").lower(),
            data=data or None,
            parts=parts,
            headers=headers,
        )


@dataclass(frozen=True)
class MessageRef:
    """Message id / thread id pair from the list endpoint"""
    id: str
    thread_id: str = ""


@dataclass(frozen=True)
class DecodedMessage:
    """Flattened, human readable message

    Every field is plain text: no markup, entities or encoded words.
    """
    id: str
    thread_id: str
    snippet: str
    subject: str
    sender: str
    date: str
    body_text: str

    def to_dict(self) -> Dict[str, str]:
        """Serialize with the field names the web client expects"""
        return {
            "id": self.id,
            "threadId": self.thread_id,
            "snippet": self.snippet,
            "subject": self.subject,
            "from": self.sender,
            "date": self.date,
            "bodyText": self.body_text,
        }


FetchResult = Union[DecodedMessage, PerItemFetchError]


@dataclass
class MessagePage:
    """One page of decoded messages

    Attributes:
        items: Decoded messages, or the error for each message that failed
        next_page_token: Continuation token from Gmail (never followed here)
    """
    items: List[FetchResult] = field(default_factory=list)
    next_page_token: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "nextPageToken": self.next_page_token,
        }
