"""Plain text extraction from Gmail message payload trees

Gmail returns a message as a tree of MIME parts. The body shown to the
summarizer is the first text/plain leaf found depth-first; failing that,
the first text/html leaf with its markup stripped; failing that, whatever
raw body data the root carries.
"""

import base64
import binascii
import logging
import re
from typing import Any, Dict, Optional, Union

from .headers import decode_html_entities
from .models import MessagePart

logger = logging.getLogger(__name__)

TEXT_PLAIN = "text/plain"
TEXT_HTML = "text/html"

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def decode_base64url(data: Optional[str]) -> str:
    """Decode base64url (padding optional) into UTF-8 text

    Best effort: empty input gives "", invalid UTF-8 sequences become
    U+FFFD, and undecodable base64 gives "" with a warning.
    """
    if not data:
        return ""
    standard = "".join(data.split()).replace("-", "+").replace("_", "/")
    standard += "=" * (-len(standard) % 4)
    try:
        raw = base64.b64decode(standard)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Could not decode base64url body data: {e}")
        return ""
    return raw.decode("utf-8", errors="replace")


def strip_html(html: str) -> str:
    """Replace tags with spaces and collapse whitespace

    A lossy regex pass, not a parser: nested or malformed tags are not
    resolved.
    """
    text = _TAG_RE.sub(" ", html)
    return _WHITESPACE_RE.sub(" ", text).strip()


def _find_first(part: MessagePart, mime_type: str) -> Optional[MessagePart]:
    """Depth-first, left-to-right search for a node of mime_type with data"""
    if part.mime_type == mime_type and part.data:
        return part
    for child in part.parts:
        found = _find_first(child, mime_type)
        if found is not None:
            return found
    return None


def extract_plain_text(payload: Union[MessagePart, Dict[str, Any], None]) -> str:
    """Produce a single plain text body for a message payload

    Args:
        payload: Parsed MessagePart or the raw Gmail payload dict

    Returns:
        Body text, or "" when the payload carries no readable content
    """
    if payload is None:
        return ""
    if not isinstance(payload, MessagePart):
        payload = MessagePart.from_dict(payload)

    plain = _find_first(payload, TEXT_PLAIN)
    if plain is not None:
        return decode_base64url(plain.data)

    html = _find_first(payload, TEXT_HTML)
    if html is not None:
        return decode_html_entities(strip_html(decode_base64url(html.data)))

    if payload.data:
        return decode_base64url(payload.data)
    return ""
