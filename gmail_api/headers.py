"""Header text decoding: RFC 2047 encoded words and HTML entities

Both decoders are best effort and never raise; on trouble they hand
back their input.
"""

import base64
import codecs
import logging
import re
from typing import Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

_ENCODED_WORD_RE = re.compile(r"=\?([^?\s]+)\?([BbQq])\?([^?]*)\?=")
# Linear whitespace between two adjacent encoded words is not displayed
_ADJACENT_WORDS_RE = re.compile(r"(=\?[^?\s]+\?[BbQq]\?[^?]*\?=)\s+(?==\?[^?\s]+\?[BbQq]\?[^?]*\?=)")
_Q_ESCAPE_RE = re.compile(rb"=([0-9A-Fa-f]{2})")

_ENTITY_RE = re.compile(r"&(#[0-9]+|#[xX][0-9A-Fa-f]+|[A-Za-z]+);")
_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}


def _charset_codec(charset: str) -> str:
    # RFC 2231 allows a language suffix: utf-8*en
    name = charset.split("*", 1)[0]
    try:
        return codecs.lookup(name).name
    except LookupError:
        logger.debug(f"Unknown charset {name!r} in encoded word, assuming utf-8")
        return "utf-8"


def _decode_word(match: "re.Match[str]") -> str:
    charset, encoding, payload = match.group(1), match.group(2).upper(), match.group(3)
    if encoding == "B":
        raw = base64.b64decode(payload + "=" * (-len(payload) % 4), validate=True)
    else:
        raw = _Q_ESCAPE_RE.sub(
            lambda m: bytes([int(m.group(1), 16)]),
            payload.replace("_", " ").encode("ascii"),
        )
    return raw.decode(_charset_codec(charset))


def decode_encoded_words(text: Optional[str]) -> str:
    """Decode every =?charset?B|Q?payload?= word in a header value

    Args:
        text: Raw header value

    Returns:
        Decoded text; the original text unchanged if any word fails to decode
    """
    if not text:
        return ""
    if "=?" not in text:
        return text
    try:
        joined = _ADJACENT_WORDS_RE.sub(r"\1", text)
        return _ENCODED_WORD_RE.sub(_decode_word, joined)
    except (ValueError, LookupError) as e:
        # binascii.Error and UnicodeError are ValueErrors; a charset naming a
        # bytes-to-bytes codec (base64, hex, zlib) fails with LookupError
        logger.warning(f"Could not decode encoded words, keeping raw header: {e}")
        return text


def _decode_entity(match: "re.Match[str]") -> str:
    name = match.group(1)
    if name.startswith("#"):
        try:
            if name[1:2] in ("x", "X"):
                codepoint = int(name[2:], 16)
            else:
                codepoint = int(name[1:])
            if 0xD800 <= codepoint <= 0xDFFF:
                return match.group(0)
            return chr(codepoint)
        except (ValueError, OverflowError):
            return match.group(0)
    return _NAMED_ENTITIES.get(name, match.group(0))


def decode_html_entities(text: Optional[str]) -> str:
    """Replace the five XML named entities and numeric references

    Unknown names and out of range code points are left as written.
    """
    if not text:
        return ""
    if "&" not in text:
        return text
    return _ENTITY_RE.sub(_decode_entity, text)


def decode_header_value(text: Optional[str]) -> str:
    """Decode a subject/from style header for display

    Encoded words first: entities may sit inside decoded words, not
    the other way round.
    """
    return decode_html_entities(decode_encoded_words(text))


def find_header(headers: Iterable[Tuple[str, str]], name: str) -> str:
    """Case-insensitive header lookup; the last occurrence wins"""
    wanted = name.lower()
    value = ""
    for header_name, header_value in headers:
        if header_name.lower() == wanted:
            value = header_value
    return value
