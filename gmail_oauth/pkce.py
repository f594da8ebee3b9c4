"""PKCE (Proof Key for Code Exchange) generation for Google OAuth

PKCE prevents authorization code interception attacks by requiring
the client to prove it initiated the OAuth flow. The verifier never
leaves the browser round-trip (it travels in a short-lived cookie) and
is not persisted server side.
"""

import base64
import hashlib
import secrets

from .models import PkceCodes


def random_verifier(byte_length: int = 32) -> str:
    """Generate a random hex string from the OS CSPRNG

    secrets has no weak fallback; if the platform cannot supply
    randomness the error propagates.

    Args:
        byte_length: Number of random bytes (hex output is twice as long)

    Returns:
        Lowercase hex string
    """
    return secrets.token_hex(byte_length)


def challenge_from_verifier(verifier: str) -> str:
    """Derive the S256 code challenge for a verifier

    Args:
        verifier: PKCE code verifier

    Returns:
        Base64url encoded SHA-256 digest without padding
    """
    digest = hashlib.sha256(verifier.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def create_pkce_pair() -> PkceCodes:
    """Generate PKCE code verifier and challenge

    Returns:
        PkceCodes with a 64 character verifier and its challenge
    """
    verifier = random_verifier(32)
    return PkceCodes(code_verifier=verifier, code_challenge=challenge_from_verifier(verifier))


def create_state() -> str:
    """Generate random state parameter for CSRF protection

    Returns:
        32 character hex string
    """
    return random_verifier(16)
