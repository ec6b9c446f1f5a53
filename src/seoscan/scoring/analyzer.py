# src/seoscan/scoring/analyzer.py

import asyncio
import logging
from contextlib import suppress
from typing import Dict, Iterable, List, Optional, Tuple

from tqdm.asyncio import tqdm_asyncio

from seoscan.utils.urls import normalize_url, origin_of
from . import browser as browser_mod
from .browser import BrowserSession, get_default_session
from .cache import ReportCache
from .dom_extractors import (
    extract_body_text, extract_heading_hierarchy, extract_meta_tags, extract_structured_data,
)
from .http_client import AsyncHtmlClient
from .keywords import extract_keyword_density
from .recommendations import generate_recommendations
from .resource_checker import check_auxiliary_resources
from .rules import evaluate_checks
from .schemas import HeadingHierarchy, MetaTagSet, SEOReport, StructuredDataItem, UrlAnalysisResult
from .scorer import calculate_seo_score

log = logging.getLogger(__name__)

TOP_KEYWORDS = 10


async def _collect_dom_signals(
    session: BrowserSession, url: str
) -> Tuple[MetaTagSet, HeadingHierarchy, List[StructuredDataItem], str]:
    # Sekventielt: samme side må ikke evalueres parallelt
    async with session.page(url) as page:
        meta_tags = await extract_meta_tags(page)
        headings = await extract_heading_hierarchy(page)
        structured_data = await extract_structured_data(page)
        body_text = await extract_body_text(page)
    return meta_tags, headings, structured_data, body_text


async def extract_seo_data(
    url: str,
    *,
    session: Optional[BrowserSession] = None,
    client: Optional[AsyncHtmlClient] = None,
) -> SEOReport:
    """
    Kør hele SEO-pipelinen for én URL.

    DOM-udtræk og robots/sitemap-prober kører samtidigt; fejl i browser,
    navigation eller DOM-evaluering afbryder kaldet, mens probe-fejl blot
    giver ``False``.
    """
    session = session or get_default_session()
    own_client = client is None
    client = client or AsyncHtmlClient()
    log.info("Starter SEO-analyse for: %s", url)

    try:
        aux_task = asyncio.ensure_future(check_auxiliary_resources(client, origin_of(url)))
        try:
            meta_tags, headings, structured_data, body_text = await _collect_dom_signals(session, url)
        except BaseException:
            aux_task.cancel()
            with suppress(asyncio.CancelledError):
                await aux_task
            raise
        has_robots_txt, has_sitemap = await aux_task
    finally:
        if own_client:
            await client.close()

    keywords = extract_keyword_density(body_text, limit=TOP_KEYWORDS)
    checks = evaluate_checks(meta_tags, headings, structured_data, has_robots_txt, has_sitemap)
    score = calculate_seo_score(checks)
    recommendations = generate_recommendations(meta_tags, headings)

    log.info("SEO-score for %s: %s (%d tjek, %d anbefalinger)", url, score, len(checks), len(recommendations))
    return {
        "score": score,
        "meta_tags": meta_tags,
        "keywords": keywords,
        "headings": headings,
        "has_robots_txt": has_robots_txt,
        "has_sitemap": has_sitemap,
        "structured_data": structured_data,
        "checks": checks,
        "recommendations": recommendations,
    }


async def close_browser() -> None:
    """Lukker den proces-globale browser (idempotent)."""
    await browser_mod.release_browser()


async def analyze_multiple_urls(
    urls: Iterable[str],
    *,
    workers: int = 4,
    cache: Optional[ReportCache] = None,
    session: Optional[BrowserSession] = None,
    show_progress: bool = True,
) -> List[UrlAnalysisResult]:
    """
    Analyserer flere URLs med begrænset samtidighed. En fejlende URL giver
    ``fetch_error`` i stedet for at stoppe hele kørslen. Resultaterne
    returneres i input-rækkefølge.
    """
    normalized = [normalize_url(u) for u in urls if u and u.strip()]
    if not normalized:
        return []

    own_session = session is None
    session = session or BrowserSession()
    sem = asyncio.Semaphore(max(1, workers))

    async with AsyncHtmlClient() as client:

        async def _one(url: str) -> UrlAnalysisResult:
            async with sem:
                try:
                    if cache is not None:
                        report = await cache.get_or_compute(
                            url, lambda: extract_seo_data(url, session=session, client=client)
                        )
                    else:
                        report = await extract_seo_data(url, session=session, client=client)
                    return {"url": url, "report": report}
                except Exception as e:
                    log.error("Analyse fejlede for %s: %s", url, e)
                    return {"url": url, "fetch_error": f"{type(e).__name__}: {e}"}

        try:
            tasks = [_one(u) for u in normalized]
            if show_progress:
                results: List[UrlAnalysisResult] = await tqdm_asyncio.gather(*tasks, desc="SEO", unit="url")
            else:
                results = await asyncio.gather(*tasks)
        finally:
            if own_session:
                await session.close()

    return list(results)


def summarize_failures(results: List[UrlAnalysisResult]) -> Dict[str, str]:
    return {r["url"]: r["fetch_error"] for r in results if "fetch_error" in r}
