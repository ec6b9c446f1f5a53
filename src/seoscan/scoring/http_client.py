# src/seoscan/scoring/http_client.py
from __future__ import annotations

import asyncio
import logging
import random
import ssl
import sys
from pathlib import Path
from typing import Dict, Optional

import certifi
import httpx
from fake_useragent import FakeUserAgentError, UserAgent
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from seoscan import config

log = logging.getLogger(__name__)

# --- User-Agent helpers ---
try:
    ua_generator = UserAgent()
except FakeUserAgentError:
    ua_generator = None

FALLBACK_USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.0 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:128.0) Gecko/20100101 Firefox/128.0",
]


def get_random_user_agent() -> str:
    return ua_generator.random if ua_generator else random.choice(FALLBACK_USER_AGENTS)


def _get_headers(base_headers: Optional[Dict] = None, user_agent: Optional[str] = None) -> Dict[str, str]:
    headers = {
        "User-Agent": user_agent or get_random_user_agent(),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,text/plain;q=0.8,*/*;q=0.7",
        "Accept-Encoding": "gzip, deflate",
    }
    if base_headers:
        headers.update(base_headers)
    return headers


def _ssl_context(verify: bool, ca_bundle: Optional[Path] = None) -> ssl.SSLContext | bool:
    if not verify:
        return False
    if sys.platform == "win32" and ca_bundle is None:
        try:
            return ssl.create_default_context()
        except ssl.SSLError:
            log.warning("Kunne ikke loade Windows system-store, falder tilbage til certifi.")
    try:
        ctx = ssl.create_default_context(cafile=certifi.where())
        if ca_bundle:
            ctx.load_verify_locations(cafile=str(ca_bundle))
        return ctx
    except (ssl.SSLError, OSError):
        log.warning("Kunne ikke loade 'certifi' bundle – bruger systemets trust store.")
        return True


class AsyncHtmlClient:
    """
    Tynd async httpx-klient til hjælpe-requests uden om browseren
    (robots.txt, sitemaps). Transportfejl forsøges igen med tenacity og
    re-raises derefter; kalderen beslutter hvordan fejlen skal tolkes.
    """

    def __init__(
        self,
        *,
        max_connections: Optional[int] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        verify_ssl: bool = True,
        ca_bundle: Optional[Path] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        max_connections = max_connections or config.MAX_CONNECTIONS
        self.timeout = timeout if timeout is not None else config.PROBE_TIMEOUT_S
        self.retries = max(1, retries if retries is not None else config.PROBE_RETRIES)
        self._sem = asyncio.Semaphore(max_connections)
        self._httpx_client = httpx.AsyncClient(
            headers={"Accept-Language": "en-US,en;q=0.9"},
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 10.0)),
            follow_redirects=True,
            http2=True,
            verify=_ssl_context(verify_ssl, ca_bundle),
            limits=httpx.Limits(max_connections=max_connections * 2, max_keepalive_connections=max_connections),
            transport=transport,
        )
        self.user_agent = get_random_user_agent()
        self._is_closed = False

    @property
    def is_closed(self) -> bool:
        return self._is_closed

    async def __aenter__(self) -> "AsyncHtmlClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def get(self, url: str, **kwargs) -> httpx.Response:
        if self._is_closed:
            raise RuntimeError(f"Kald forsøgt på lukket klient: {url}")
        headers = _get_headers(kwargs.pop("headers", None), user_agent=self.user_agent)
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_exponential_jitter(initial=0.2, max=2),
            stop=stop_after_attempt(self.retries),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                async with self._sem:
                    return await self._httpx_client.get(url, headers=headers, **kwargs)

    async def close(self) -> None:
        if self._is_closed:
            return
        self._is_closed = True
        try:
            await asyncio.shield(self._httpx_client.aclose())
        except Exception as e:
            log.error("Fejl ved lukning af httpx: %s", e, exc_info=True)
