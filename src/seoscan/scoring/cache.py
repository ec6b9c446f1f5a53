# src/seoscan/scoring/cache.py
from __future__ import annotations

import asyncio
import hashlib
import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional

from diskcache import Cache

from seoscan import config
from .schemas import SEOReport

log = logging.getLogger(__name__)


class ReportCache:
    """
    Disk-cache for færdige rapporter, nøglet på SHA-256 af URL'en.

    ``get_or_compute`` samler samtidige forespørgsler på samme URL bag én
    lås, så kun den første faktisk kører pipelinen. Fejl caches ikke.
    """

    def __init__(self, directory: Optional[Path] = None, ttl_seconds: Optional[int] = None):
        self.directory = Path(directory or config.CACHE_DIR)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else config.CACHE_TTL_S
        self._cache = Cache(str(self.directory / "reports"))
        self._url_locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    @staticmethod
    def key_for(url: str) -> str:
        return "seo_" + hashlib.sha256(url.encode("utf-8")).hexdigest()

    def get(self, url: str) -> Optional[SEOReport]:
        return self._cache.get(self.key_for(url))

    def set(self, url: str, report: SEOReport) -> None:
        self._cache.set(self.key_for(url), report, expire=self.ttl_seconds)

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()

    async def get_or_compute(self, url: str, factory: Callable[[], Awaitable[SEOReport]]) -> SEOReport:
        cached = self.get(url)
        if cached is not None:
            log.info("Cache hit for %s", url)
            return cached

        lock = self._url_locks.setdefault(url, asyncio.Lock())
        self._lock_users[url] = self._lock_users.get(url, 0) + 1
        try:
            async with lock:
                # En anden coroutine kan have udfyldt cachen mens vi ventede
                cached = self.get(url)
                if cached is not None:
                    log.info("Cache hit for %s (efter ventetid)", url)
                    return cached
                report = await factory()
                self.set(url, report)
            return report
        finally:
            # Sidste bruger fjerner låsen igen
            self._lock_users[url] -= 1
            if not self._lock_users[url]:
                del self._lock_users[url]
                self._url_locks.pop(url, None)
