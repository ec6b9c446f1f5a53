# tests/test_cache.py

import asyncio

import pytest

from seoscan.scoring.cache import ReportCache


@pytest.fixture
def cache(tmp_path):
    c = ReportCache(directory=tmp_path, ttl_seconds=60)
    yield c
    c.close()


def test_key_is_stable_and_prefixed():
    key = ReportCache.key_for("https://example.com")
    assert key.startswith("seo_")
    assert key == ReportCache.key_for("https://example.com")
    assert key != ReportCache.key_for("https://example.org")


def test_get_set_clear(cache):
    assert cache.get("https://a.test") is None
    cache.set("https://a.test", {"score": 42})
    assert cache.get("https://a.test") == {"score": 42}
    cache.clear()
    assert cache.get("https://a.test") is None


@pytest.mark.asyncio
async def test_concurrent_requests_compute_once(cache):
    calls = 0

    async def factory():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return {"score": 7}

    results = await asyncio.gather(*(cache.get_or_compute("https://a.test", factory) for _ in range(4)))
    assert calls == 1
    assert all(r == {"score": 7} for r in results)


@pytest.mark.asyncio
async def test_failures_are_not_cached(cache):
    async def broken():
        raise RuntimeError("nope")

    async def working():
        return {"score": 1}

    with pytest.raises(RuntimeError):
        await cache.get_or_compute("https://a.test", broken)
    assert cache.get("https://a.test") is None
    assert await cache.get_or_compute("https://a.test", working) == {"score": 1}


@pytest.mark.asyncio
async def test_url_locks_are_released_after_use(cache):
    async def factory():
        await asyncio.sleep(0.01)
        return {"score": 3}

    async def broken():
        raise RuntimeError("nope")

    await asyncio.gather(*(cache.get_or_compute(f"https://{i}.test", factory) for i in range(3)))
    with pytest.raises(RuntimeError):
        await cache.get_or_compute("https://x.test", broken)
    assert cache._url_locks == {}
    assert cache._lock_users == {}
