"""Tests for the memory and sqlite result caches."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.cache import CACHE_TTL_SECONDS, MemoryCache, make_cache
from core.storage import SqliteCache

PAYLOAD = {"ok": True, "identity": "KGJN53", "sourceUrl": "u", "items": []}


@pytest.fixture(params=["memory", "sqlite"])
def cache(request, clock, tmp_path):
    if request.param == "memory":
        return MemoryCache(clock=clock)
    return SqliteCache(ttl=CACHE_TTL_SECONDS, db_path=str(tmp_path / "cache.sqlite3"), clock=clock)


class TestResultCache:
    def test_missing_identity(self, cache) -> None:
        assert cache.get("nobody") is None

    def test_fresh_entry_is_returned(self, cache, clock) -> None:
        cache.put("KGJN53", PAYLOAD)
        clock.advance(CACHE_TTL_SECONDS - 1)
        entry = cache.get("KGJN53")
        assert entry is not None
        assert entry.identity == "KGJN53"
        assert entry.payload == PAYLOAD

    def test_entry_expires_after_ttl(self, cache, clock) -> None:
        cache.put("KGJN53", PAYLOAD)
        clock.advance(CACHE_TTL_SECONDS)
        assert cache.get("KGJN53") is None

    def test_put_overwrites_and_restarts_ttl(self, cache, clock) -> None:
        cache.put("KGJN53", PAYLOAD)
        clock.advance(20)
        newer = dict(PAYLOAD, items=[{"name": "Sword", "image": "", "rarity": ""}])
        cache.put("KGJN53", newer)
        clock.advance(20)
        assert cache.get("KGJN53").payload == newer

    def test_identities_are_independent(self, cache) -> None:
        cache.put("a", dict(PAYLOAD, identity="a"))
        cache.put("b", dict(PAYLOAD, identity="b"))
        assert cache.get("a").payload["identity"] == "a"
        assert cache.get("b").payload["identity"] == "b"


def test_sqlite_payload_serializes_identically(clock, tmp_path) -> None:
    cache = SqliteCache(ttl=CACHE_TTL_SECONDS, db_path=str(tmp_path / "c.sqlite3"), clock=clock)
    payload = dict(PAYLOAD, items=[{"name": "Sword", "image": "https://kirka.io/a.png", "rarity": "rare"}])
    cache.put("KGJN53", payload)
    assert json.dumps(cache.get("KGJN53").payload) == json.dumps(payload)


def test_sqlite_entries_are_shared_between_instances(clock, tmp_path) -> None:
    path = str(tmp_path / "shared.sqlite3")
    SqliteCache(ttl=CACHE_TTL_SECONDS, db_path=path, clock=clock).put("KGJN53", PAYLOAD)
    other = SqliteCache(ttl=CACHE_TTL_SECONDS, db_path=path, clock=clock)
    assert other.get("KGJN53").payload == PAYLOAD


def test_memory_cache_concurrent_writers(clock) -> None:
    cache = MemoryCache(clock=clock)

    def write(i: int) -> None:
        cache.put(f"id{i % 10}", dict(PAYLOAD, identity=f"id{i % 10}"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(write, range(200)))

    assert len(cache) == 10
    for i in range(10):
        assert cache.get(f"id{i}").payload["identity"] == f"id{i}"


def test_make_cache_defaults_to_memory() -> None:
    assert isinstance(make_cache("memory"), MemoryCache)
    assert isinstance(make_cache("redis"), MemoryCache)


def test_memory_cache_entries_cannot_be_edited_by_callers(clock) -> None:
    cache = MemoryCache(clock=clock)
    payload = dict(PAYLOAD, items=[{"name": "Sword", "image": "", "rarity": ""}])
    cache.put("KGJN53", payload)
    payload["items"].clear()
    cache.get("KGJN53").payload["items"].append({"name": "Fake"})
    assert cache.get("KGJN53").payload["items"] == [{"name": "Sword", "image": "", "rarity": ""}]
