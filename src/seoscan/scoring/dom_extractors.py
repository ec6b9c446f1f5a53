# src/seoscan/scoring/dom_extractors.py
"""
DOM-signaler fra en indlæst side.

Hver extractor evaluerer et lille JavaScript-snippet i siden og former
resultatet i Python. Formningen ligger i rene funktioner (``build_*`` /
``parse_*``), så den kan testes uden en browser.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from playwright.async_api import Error as PlaywrightError

from seoscan.errors import ExtractionError
from .schemas import (
    HEADING_LEVELS, HeadingHierarchy, JsonLdParse, MetaTagSet, StructuredDataItem,
)

log = logging.getLogger(__name__)

META_TAGS_JS = """
() => {
    const titleEl = document.querySelector('title');
    const metas = [];
    document.querySelectorAll('meta').forEach(meta => {
        const name = meta.getAttribute('name') || meta.getAttribute('property');
        const content = meta.getAttribute('content');
        if (name && content) metas.push([name, content]);
    });
    const canonicalEl = document.querySelector('link[rel="canonical"]');
    return {
        title: titleEl ? (titleEl.textContent || '').trim() : null,
        metas: metas,
        canonical: canonicalEl ? (canonicalEl.getAttribute('href') || '') : null,
    };
}
"""

HEADINGS_JS = """
() => {
    const out = {};
    ['h1', 'h2', 'h3', 'h4', 'h5', 'h6'].forEach(tag => {
        out[tag] = document.querySelectorAll(tag).length;
    });
    return out;
}
"""

STRUCTURED_DATA_JS = """
() => ({
    jsonld: Array.from(document.querySelectorAll('script[type="application/ld+json"]'))
        .map(s => s.textContent || ''),
    microdata: Array.from(document.querySelectorAll('[itemscope]'))
        .map(el => el.getAttribute('itemtype')),
})
"""


async def _evaluate(page, script: str, step: str) -> Any:
    try:
        return await page.evaluate(script)
    except PlaywrightError as e:
        raise ExtractionError(step, getattr(page, "url", "?"), e.message) from e


# ---------- Meta tags -------------------------------------------------------
def build_meta_tags(raw: Optional[Dict[str, Any]]) -> MetaTagSet:
    """
    title først, derefter meta name/property (sidste vinder ved dubletter,
    også over 'title'), til sidst canonical.
    """
    raw = raw or {}
    tags: MetaTagSet = {}
    if raw.get("title") is not None:
        tags["title"] = str(raw["title"])
    for pair in raw.get("metas") or []:
        name, content = pair[0], pair[1]
        if name and content:
            tags[str(name)] = str(content)
    if raw.get("canonical") is not None:
        tags["canonical"] = str(raw["canonical"])
    return tags


async def extract_meta_tags(page) -> MetaTagSet:
    return build_meta_tags(await _evaluate(page, META_TAGS_JS, "meta tags"))


# ---------- Headings --------------------------------------------------------
def build_heading_hierarchy(raw: Optional[Dict[str, Any]]) -> HeadingHierarchy:
    raw = raw or {}
    counts = {}
    for level in HEADING_LEVELS:
        try:
            counts[level] = max(0, int(raw.get(level) or 0))
        except (TypeError, ValueError):
            counts[level] = 0
    return HeadingHierarchy(**counts)


async def extract_heading_hierarchy(page) -> HeadingHierarchy:
    return build_heading_hierarchy(await _evaluate(page, HEADINGS_JS, "headings"))


# ---------- Structured data -------------------------------------------------
def _type_name(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def parse_jsonld_block(text: str) -> JsonLdParse:
    """Parser én JSON-LD-blok. Tom blok svarer til '{}' (og har derfor ingen @type)."""
    try:
        data = json.loads(text or "{}")
    except json.JSONDecodeError as e:
        log.debug("Ugyldig JSON-LD sprunget over: %s", e)
        return JsonLdParse(skipped="malformed")
    if not isinstance(data, dict) or not data.get("@type"):
        return JsonLdParse(skipped="no_type")
    return JsonLdParse(item={"type": _type_name(data["@type"]), "data": data})


def microdata_item(itemtype: Optional[str]) -> Optional[StructuredDataItem]:
    if not itemtype:
        return None
    name = itemtype.split("/")[-1] or "Unknown"
    return {"type": name, "data": {"itemtype": itemtype}}


def build_structured_data(jsonld_blocks: Iterable[str], itemtypes: Iterable[Optional[str]]) -> List[StructuredDataItem]:
    items: List[StructuredDataItem] = []
    skipped = 0
    for block in jsonld_blocks:
        parsed = parse_jsonld_block(block)
        if parsed.ok:
            items.append(parsed.item)
        else:
            skipped += 1
    for itemtype in itemtypes:
        item = microdata_item(itemtype)
        if item is not None:
            items.append(item)
    if skipped:
        log.debug("%d JSON-LD blok(ke) sprunget over", skipped)
    return items


async def extract_structured_data(page) -> List[StructuredDataItem]:
    raw = await _evaluate(page, STRUCTURED_DATA_JS, "structured data") or {}
    return build_structured_data(raw.get("jsonld") or [], raw.get("microdata") or [])


# ---------- Body text -------------------------------------------------------
async def extract_body_text(page) -> str:
    try:
        text = await page.text_content("body")
    except PlaywrightError as e:
        raise ExtractionError("body text", getattr(page, "url", "?"), e.message) from e
    return text or ""
