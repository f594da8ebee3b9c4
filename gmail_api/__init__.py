"""Gmail mailbox access and message decoding

Turns Gmail message resources into flat plain-text records ready for
summarization.
"""

from .models import DecodedMessage, FetchResult, MessagePage, MessagePart, MessageRef
from .headers import decode_encoded_words, decode_header_value, decode_html_entities, find_header
from .payload import decode_base64url, extract_plain_text, strip_html
from .message import decode_gmail_message, decode_message
from .client import GmailClient

__all__ = [
    "DecodedMessage",
    "FetchResult",
    "MessagePage",
    "MessagePart",
    "MessageRef",
    "decode_encoded_words",
    "decode_header_value",
    "decode_html_entities",
    "find_header",
    "decode_base64url",
    "extract_plain_text",
    "strip_html",
    "decode_gmail_message",
    "decode_message",
    "GmailClient",
]
