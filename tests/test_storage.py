from __future__ import annotations

import re
import threading

from gmail_oauth import InMemoryTokenStore, TokenRecord
from tests.helpers import FakeClock


def test_store_starts_empty_and_ids_are_random_hex() -> None:
    store = InMemoryTokenStore()

    first, second = store.create_session_id(), store.create_session_id()

    assert len(store) == 0
    assert re.fullmatch(r"[0-9a-f]{32}", first)
    assert first != second


def test_put_stamps_creation_time() -> None:
    clock = FakeClock(1_700_000_000.5)
    store = InMemoryTokenStore(clock=clock)

    stored = store.put("sid", TokenRecord(access_token="a", expires_in=3600, created_at_ms=42))

    assert stored.created_at_ms == 1_700_000_000_500
    assert store.get("sid") == stored


def test_put_replaces_whole_record() -> None:
    store = InMemoryTokenStore()
    store.put("sid", TokenRecord(access_token="a", expires_in=3600, refresh_token="r", scope="s"))

    store.put("sid", TokenRecord(access_token="b", expires_in=100))

    record = store.get("sid")
    assert record is not None
    assert record.access_token == "b"
    assert record.refresh_token is None
    assert record.scope is None


def test_get_unknown_session_returns_none() -> None:
    assert InMemoryTokenStore().get("missing") is None


def test_delete_is_idempotent() -> None:
    store = InMemoryTokenStore()
    store.put("sid", TokenRecord(access_token="a", expires_in=3600))

    store.delete("sid")
    store.delete("sid")
    store.delete("never-existed")

    assert store.get("sid") is None
    assert "sid" not in store


def test_clear_removes_everything() -> None:
    store = InMemoryTokenStore()
    for i in range(3):
        store.put(f"sid-{i}", TokenRecord(access_token=str(i), expires_in=3600))

    store.clear()

    assert len(store) == 0


def test_concurrent_puts_leave_one_coherent_record() -> None:
    store = InMemoryTokenStore()

    def writer(n: int) -> None:
        for _ in range(200):
            store.put("sid", TokenRecord(access_token=f"a{n}", expires_in=3600, refresh_token=f"r{n}"))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    record = store.get("sid")
    assert record is not None
    assert record.access_token[1:] == record.refresh_token[1:]
