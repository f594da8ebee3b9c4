from __future__ import annotations

import asyncio

import httpx
import pytest

from gmail_oauth import (
    GoogleOAuthManager,
    ProviderError,
    RefreshUnavailable,
    SessionNotFound,
    TokenRecord,
)
from tests.helpers import FakeClock, form_fields, json_response, make_manager, token_payload


def no_requests(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected request to {request.url}")


def test_complete_login_stores_tokens_under_new_session() -> None:
    clock = FakeClock()

    def handler(request: httpx.Request) -> httpx.Response:
        assert form_fields(request)["code_verifier"] == "verifier-1"
        return json_response(token_payload())

    manager = make_manager(handler, clock)

    session_id = asyncio.run(manager.complete_login("code-1", "verifier-1"))

    record = manager.storage.get(session_id)
    assert record is not None
    assert record.access_token == "access-1"
    assert record.created_at_ms == int(clock.now * 1000)
    assert manager.is_authenticated(session_id)


def test_complete_login_failure_creates_no_session() -> None:
    manager = make_manager(lambda request: httpx.Response(400, text="invalid_grant"))

    with pytest.raises(ProviderError):
        asyncio.run(manager.complete_login("bad-code", "v"))

    assert len(manager.storage) == 0


def test_fresh_token_is_returned_without_refresh() -> None:
    clock = FakeClock()
    manager = make_manager(no_requests, clock)
    manager.storage.put("sid", TokenRecord.from_response(token_payload()))
    clock.advance(3600 - 61)

    assert asyncio.run(manager.ensure_access_token("sid")) == "access-1"


def test_unknown_session_raises_session_not_found() -> None:
    manager = make_manager(no_requests)

    with pytest.raises(SessionNotFound):
        asyncio.run(manager.ensure_access_token("nope"))


def test_expired_token_without_refresh_token_raises_refresh_unavailable() -> None:
    clock = FakeClock()
    manager = make_manager(no_requests, clock)
    manager.storage.put("sid", TokenRecord.from_response(token_payload(refresh_token=None)))
    clock.advance(3600 - 60)

    with pytest.raises(RefreshUnavailable):
        asyncio.run(manager.ensure_access_token("sid"))


def test_expired_token_is_refreshed_and_refresh_token_carried_forward() -> None:
    clock = FakeClock()
    refreshes: list[dict[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        refreshes.append(form_fields(request))
        return json_response(token_payload(access_token="access-2", refresh_token=None))

    manager = make_manager(handler, clock)
    manager.storage.put("sid", TokenRecord.from_response(token_payload()))
    clock.advance(3600 - 60)

    token = asyncio.run(manager.ensure_access_token("sid"))

    assert token == "access-2"
    assert refreshes[0]["grant_type"] == "refresh_token"
    assert refreshes[0]["refresh_token"] == "refresh-1"
    record = manager.storage.get("sid")
    assert record is not None
    assert record.access_token == "access-2"
    assert record.refresh_token == "refresh-1"
    assert record.created_at_ms == int(clock.now * 1000)


def test_rotated_refresh_token_replaces_old_one() -> None:
    clock = FakeClock()
    manager = make_manager(
        lambda request: json_response(token_payload(access_token="access-2", refresh_token="refresh-2")),
        clock,
    )
    manager.storage.put("sid", TokenRecord.from_response(token_payload()))
    clock.advance(4000)

    asyncio.run(manager.ensure_access_token("sid"))

    assert manager.storage.get("sid").refresh_token == "refresh-2"


def test_failed_refresh_leaves_record_untouched() -> None:
    clock = FakeClock()
    manager = make_manager(lambda request: httpx.Response(400, text="invalid_grant"), clock)
    original = manager.storage.put("sid", TokenRecord.from_response(token_payload()))
    clock.advance(4000)

    with pytest.raises(ProviderError):
        asyncio.run(manager.ensure_access_token("sid"))

    assert manager.storage.get("sid") == original


def test_concurrent_callers_share_one_refresh() -> None:
    clock = FakeClock()
    calls = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return json_response(token_payload(access_token=f"access-{calls + 1}", refresh_token=None))

    manager = make_manager(handler, clock)
    manager.storage.put("sid", TokenRecord.from_response(token_payload()))
    clock.advance(4000)

    async def run() -> list[str]:
        return await asyncio.gather(*(manager.ensure_access_token("sid") for _ in range(5)))

    tokens = asyncio.run(run())

    assert calls == 1
    assert tokens == ["access-2"] * 5
    record = manager.storage.get("sid")
    assert record.access_token == "access-2"
    assert record.refresh_token == "refresh-1"


def test_logout_then_ensure_raises_session_not_found() -> None:
    manager = make_manager(no_requests)
    manager.storage.put("sid", TokenRecord.from_response(token_payload()))

    manager.logout("sid")
    manager.logout("sid")

    assert not manager.is_authenticated("sid")
    with pytest.raises(SessionNotFound):
        asyncio.run(manager.ensure_access_token("sid"))


def test_logout_during_refresh_does_not_resurrect_session() -> None:
    clock = FakeClock()
    manager: GoogleOAuthManager

    async def handler(request: httpx.Request) -> httpx.Response:
        manager.logout("sid")
        return json_response(token_payload(access_token="access-2"))

    manager = make_manager(handler, clock)
    manager.storage.put("sid", TokenRecord.from_response(token_payload()))
    clock.advance(4000)

    with pytest.raises(SessionNotFound):
        asyncio.run(manager.ensure_access_token("sid"))

    assert manager.storage.get("sid") is None


def test_is_authenticated_handles_missing_cookie() -> None:
    manager = make_manager(no_requests)

    assert manager.is_authenticated(None) is False
    assert manager.is_authenticated("") is False


def test_locks_of_sessions_removed_from_store_are_pruned_on_login() -> None:
    manager = make_manager(lambda request: json_response(token_payload()))
    manager.storage.put("stale", TokenRecord.from_response(token_payload()))
    asyncio.run(manager.ensure_access_token("stale"))
    assert "stale" in manager._locks

    manager.storage.clear()
    session_id = asyncio.run(manager.complete_login("code-1", "verifier-1"))

    assert "stale" not in manager._locks
    assert manager.is_authenticated(session_id)
