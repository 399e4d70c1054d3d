import pytest

from invoice_fields.processing import TextCache


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TextCache(ttl_seconds=60, max_entries=2, clock=clock)


def test_defaults_from_config():
    cache = TextCache()
    assert cache.ttl_seconds == 600
    assert cache.max_entries == 256


def test_get_within_window(cache, clock):
    cache.put("doc-1", "text")
    clock.now = 59
    assert cache.get("doc-1") == "text"
    assert "doc-1" in cache


def test_entry_expires_at_window_end(cache, clock):
    cache.put("doc-1", "text")
    clock.now = 60
    assert cache.get("doc-1") is None
    assert len(cache) == 0


def test_put_restarts_window(cache, clock):
    cache.put("doc-1", "old")
    clock.now = 50
    cache.put("doc-1", "new")
    clock.now = 100
    assert cache.get("doc-1") == "new"


def test_oldest_entry_evicted_when_full(cache):
    cache.put("doc-1", "a")
    cache.put("doc-2", "b")
    cache.put("doc-3", "c")
    assert "doc-1" not in cache
    assert cache.get("doc-3") == "c"
    assert len(cache) == 2


def test_expired_entries_make_room_first(cache, clock):
    cache.put("doc-1", "a")
    clock.now = 30
    cache.put("doc-2", "b")
    clock.now = 61
    cache.put("doc-3", "c")
    assert cache.get("doc-2") == "b"
    assert cache.get("doc-3") == "c"


def test_invalidate_and_clear(cache):
    cache.put("doc-1", "a")
    assert cache.invalidate("doc-1") is True
    assert cache.invalidate("doc-1") is False
    cache.put("doc-2", "b")
    cache.clear()
    assert len(cache) == 0


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        TextCache(max_entries=0)
