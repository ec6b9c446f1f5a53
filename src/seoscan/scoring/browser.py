# src/seoscan/scoring/browser.py
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from seoscan import config
from seoscan.errors import BrowserLaunchError, NavigationError

log = logging.getLogger(__name__)

# Nødvendige i containere / begrænsede miljøer uden user namespaces
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
]


class BrowserSession:
    """
    Ejer én headless Chromium-proces.

    Browseren startes dovent ved første ``open()`` og genbruges derefter;
    samtidige første-kald serialiseres af en lås, så der kun startes én proces.
    Hver ``page()`` får sin egen fane, som altid lukkes igen.
    """

    def __init__(
        self,
        *,
        executable_path: Optional[str] = None,
        headless: Optional[bool] = None,
        launch_args: Optional[List[str]] = None,
        navigation_timeout_ms: Optional[int] = None,
    ):
        self.executable_path = executable_path if executable_path is not None else config.CHROMIUM_EXECUTABLE_PATH
        self.headless = config.HEADLESS if headless is None else headless
        self.launch_args = list(launch_args) if launch_args is not None else list(LAUNCH_ARGS)
        self.navigation_timeout_ms = navigation_timeout_ms or config.NAVIGATION_TIMEOUT_MS
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()
        self.launch_count = 0

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    async def open(self) -> Browser:
        if self._browser is not None:
            return self._browser
        async with self._lock:
            if self._browser is not None:
                return self._browser
            log.info("Starter headless Chromium%s…",
                     f" ({self.executable_path})" if self.executable_path else "")
            pw: Optional[Playwright] = None
            try:
                pw = await async_playwright().start()
                browser = await pw.chromium.launch(
                    headless=self.headless,
                    args=self.launch_args,
                    executable_path=self.executable_path or None,
                )
            except Exception as e:
                log.error("FATAL: Kunne ikke starte Chromium: %s", e)
                if pw is not None:
                    await pw.stop()
                raise BrowserLaunchError(str(e)) from e
            self._playwright = pw
            self._browser = browser
            self.launch_count += 1
            log.info("Chromium startet.")
            return browser

    async def close(self) -> None:
        async with self._lock:
            browser, pw = self._browser, self._playwright
            self._browser = None
            self._playwright = None
            try:
                if browser is not None:
                    await browser.close()
            finally:
                if pw is not None:
                    await pw.stop()
                    log.info("Chromium lukket.")

    async def __aenter__(self) -> "BrowserSession":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @asynccontextmanager
    async def page(self, url: str, *, timeout_ms: Optional[int] = None) -> AsyncIterator[Page]:
        """Åbner en ny fane, navigerer til ``url`` og lukker fanen uanset udfald."""
        browser = await self.open()
        page = await browser.new_page()
        try:
            timeout = timeout_ms or self.navigation_timeout_ms
            try:
                await page.goto(url, wait_until="domcontentloaded", timeout=timeout)
            except PlaywrightTimeoutError as e:
                raise NavigationError(url, f"timeout efter {timeout} ms") from e
            except PlaywrightError as e:
                raise NavigationError(url, e.message) from e
            yield page
        finally:
            try:
                await page.close()
            except PlaywrightError as e:
                log.debug("Kunne ikke lukke side for %s: %s", url, e)


# --------------------------------------------------------------------
# Proces-global standard-session
# --------------------------------------------------------------------
_default_session: Optional[BrowserSession] = None


def get_default_session() -> BrowserSession:
    global _default_session
    if _default_session is None:
        _default_session = BrowserSession()
    return _default_session


async def acquire_browser() -> Browser:
    """Returnerer den delte browser og starter den ved første kald."""
    return await get_default_session().open()


async def release_browser() -> None:
    """Lukker og rydder den delte browser. Sikker at kalde flere gange."""
    global _default_session
    session, _default_session = _default_session, None
    if session is not None:
        await session.close()


close_browser = release_browser
