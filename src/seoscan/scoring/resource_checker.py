# src/seoscan/scoring/resource_checker.py

import logging
from typing import Tuple

import httpx

from .http_client import AsyncHtmlClient
from .schemas import ProbeResult

log = logging.getLogger(__name__)

SITEMAP_PATHS = [
    "/sitemap.xml",
    "/sitemap_index.xml",
    "/sitemap.txt",
]

SITEMAP_DIRECTIVE = "sitemap:"


async def probe(client: AsyncHtmlClient, url: str, *, keep_body: bool = False) -> ProbeResult:
    """GET mod ``url``. Netværksfejl giver et negativt resultat i stedet for en exception."""
    try:
        resp = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        log.debug("Probe af %s fejlede: %s", url, e)
        return ProbeResult(url=url, found=False, error=f"{type(e).__name__}: {e}")
    found = resp.is_success
    body = resp.text if (keep_body and found) else None
    return ProbeResult(url=url, found=found, status=resp.status_code, body=body)


def robots_mentions_sitemap(robots_txt: str) -> bool:
    # Hele kroppen scannes, også når serveren pakker robots.txt ind i HTML
    return SITEMAP_DIRECTIVE in (robots_txt or "").lower()


async def check_robots_txt(client: AsyncHtmlClient, origin: str) -> bool:
    result = await probe(client, f"{origin}/robots.txt")
    log.debug("robots.txt for %s: %s", origin, result)
    return result.found


async def check_sitemap(client: AsyncHtmlClient, origin: str, has_robots_txt: bool) -> bool:
    """
    Prøver standard-stierne i rækkefølge; første 2xx vinder. Findes ingen og
    har sitet en robots.txt, hentes den igen og scannes for 'Sitemap:'.
    """
    for path in SITEMAP_PATHS:
        result = await probe(client, f"{origin}{path}")
        if result.error:
            # Netværksfejl afbryder kæden, som ved de øvrige prober
            return False
        if result.found:
            log.info("Sitemap fundet for %s: %s", origin, result.url)
            return True

    if has_robots_txt:
        robots = await probe(client, f"{origin}/robots.txt", keep_body=True)
        if robots.found and robots_mentions_sitemap(robots.body or ""):
            log.info("Sitemap-direktiv fundet i robots.txt for %s", origin)
            return True

    return False


async def check_auxiliary_resources(client: AsyncHtmlClient, origin: str) -> Tuple[bool, bool]:
    has_robots = await check_robots_txt(client, origin)
    has_sitemap = await check_sitemap(client, origin, has_robots)
    return has_robots, has_sitemap
