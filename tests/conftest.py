# tests/conftest.py
"""
Pytest-konfiguration.

* ``src`` lægges på sys.path, så testene kan køres uden pip install.
* ``FakePage`` / ``FakeSession`` erstatter Playwright i unit-tests: de
  svarer på de samme JS-snippets som extractorerne sender.
* ``client`` er en rigtig AsyncHtmlClient uden retries; ``router`` er en aktiv
  respx-router, hvor testen registrerer sine HTTP-svar.
"""

import os
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_PATH = os.path.join(PROJECT_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

import pytest
import pytest_asyncio
import respx

from seoscan.scoring import dom_extractors
from seoscan.scoring.http_client import AsyncHtmlClient


class FakePage:
    """Minimal Playwright-Page med forudbestemte DOM-svar."""

    def __init__(
        self,
        *,
        title: Optional[str] = None,
        metas: Optional[List[List[str]]] = None,
        canonical: Optional[str] = None,
        headings: Optional[Dict[str, int]] = None,
        jsonld: Optional[List[str]] = None,
        microdata: Optional[List[Optional[str]]] = None,
        body: Optional[str] = "",
        url: str = "https://example.com/",
        fail_on: Optional[str] = None,
    ):
        self.url = url
        self.closed = False
        self.evaluated: List[str] = []
        self._fail_on = fail_on
        self._answers: Dict[str, Any] = {
            dom_extractors.META_TAGS_JS: {"title": title, "metas": metas or [], "canonical": canonical},
            dom_extractors.HEADINGS_JS: {f"h{i}": 0 for i in range(1, 7)} | (headings or {}),
            dom_extractors.STRUCTURED_DATA_JS: {"jsonld": jsonld or [], "microdata": microdata or []},
        }
        self._body = body

    async def evaluate(self, script: str):
        from playwright.async_api import Error as PlaywrightError

        self.evaluated.append(script)
        if self._fail_on is not None and self._fail_on == script:
            raise PlaywrightError("Execution context was destroyed")
        return self._answers[script]

    async def text_content(self, selector: str):
        assert selector == "body"
        return self._body

    async def close(self):
        self.closed = True


class FakeSession:
    """Opfører sig som BrowserSession.page(), men uden browser."""

    def __init__(self, page: FakePage, nav_error: Optional[Exception] = None):
        self.fake_page = page
        self.nav_error = nav_error
        self.visited: List[str] = []

    @asynccontextmanager
    async def page(self, url: str, *, timeout_ms: Optional[int] = None):
        self.visited.append(url)
        try:
            if self.nav_error is not None:
                raise self.nav_error
            yield self.fake_page
        finally:
            await self.fake_page.close()


@pytest.fixture
def make_page():
    return FakePage


@pytest.fixture
def make_session():
    return FakeSession


@pytest_asyncio.fixture
async def client():
    c = AsyncHtmlClient(retries=1, timeout=5.0)
    yield c
    await c.close()


@pytest.fixture
def router():
    # Ubrugte ruter er ok: prober stopper ved første fund
    with respx.mock(assert_all_called=False) as r:
        yield r
