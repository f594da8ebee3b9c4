"""Assembly of decoded message records from Gmail resources"""

from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .headers import decode_header_value, decode_html_entities, find_header
from .models import DecodedMessage, MessagePart
from .payload import extract_plain_text


def _normalize_headers(headers: Any) -> Tuple[Tuple[str, str], ...]:
    if headers is None:
        return ()
    if isinstance(headers, dict):
        return tuple((str(k), str(v)) for k, v in headers.items())
    normalized = []
    for header in headers:
        if isinstance(header, dict):
            normalized.append((str(header.get("name", "")), str(header.get("value", ""))))
        else:
            name, value = header
            normalized.append((str(name), str(value)))
    return tuple(normalized)


def decode_message(
    payload: Union[MessagePart, Dict[str, Any], None],
    headers: Optional[Iterable[Any]] = None,
    message_id: str = "",
    thread_id: str = "",
    snippet: str = "",
) -> DecodedMessage:
    """Flatten a message payload tree and its headers into plain text

    Args:
        payload: Payload tree (MessagePart or raw Gmail dict)
        headers: Gmail style [{"name", "value"}] list, (name, value) pairs
            or a mapping; defaults to the payload's own headers
        message_id: Gmail message id
        thread_id: Gmail thread id
        snippet: Gmail snippet (HTML escaped by Gmail)

    Returns:
        DecodedMessage with every field decoded
    """
    if not isinstance(payload, MessagePart):
        payload = MessagePart.from_dict(payload)

    pairs = payload.headers if headers is None else _normalize_headers(headers)

    return DecodedMessage(
        id=message_id,
        thread_id=thread_id,
        snippet=decode_html_entities(snippet),
        subject=decode_header_value(find_header(pairs, "Subject")),
        sender=decode_header_value(find_header(pairs, "From")),
        date=find_header(pairs, "Date"),
        body_text=extract_plain_text(payload),
    )


def decode_gmail_message(resource: Dict[str, Any]) -> DecodedMessage:
    """Decode a full (format=full) Gmail message resource"""
    return decode_message(
        resource.get("payload"),
        message_id=str(resource.get("id") or ""),
        thread_id=str(resource.get("threadId") or ""),
        snippet=str(resource.get("snippet") or ""),
    )
