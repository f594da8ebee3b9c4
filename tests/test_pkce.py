from __future__ import annotations

import base64
import hashlib
import re

from gmail_oauth import challenge_from_verifier, create_pkce_pair, create_state, random_verifier


def test_random_verifier_is_hex_of_requested_length() -> None:
    verifier = random_verifier()

    assert len(verifier) == 64
    assert re.fullmatch(r"[0-9a-f]{64}", verifier)
    assert len(random_verifier(16)) == 32


def test_random_verifier_does_not_repeat() -> None:
    assert len({random_verifier() for _ in range(50)}) == 50


def test_challenge_matches_rfc7636_appendix_b() -> None:
    verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

    assert challenge_from_verifier(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"


def test_challenge_is_deterministic_and_url_safe() -> None:
    for _ in range(200):
        verifier = random_verifier(32)
        challenge = challenge_from_verifier(verifier)

        assert challenge == challenge_from_verifier(verifier)
        assert "+" not in challenge
        assert "/" not in challenge
        assert "=" not in challenge
        assert len(challenge) == 43


def test_challenge_decodes_to_sha256_of_verifier() -> None:
    verifier = random_verifier()
    challenge = challenge_from_verifier(verifier)

    decoded = base64.urlsafe_b64decode(challenge + "=")

    assert decoded == hashlib.sha256(verifier.encode("utf-8")).digest()


def test_create_pkce_pair_links_verifier_and_challenge() -> None:
    pair = create_pkce_pair()

    assert pair.code_challenge == challenge_from_verifier(pair.code_verifier)


def test_create_state_is_32_hex_chars() -> None:
    assert re.fullmatch(r"[0-9a-f]{32}", create_state())
