# src/seoscan/scoring/rules.py

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from seoscan import config
from .schemas import HeadingHierarchy, MetaTagSet, SEOCheck, StructuredDataItem

log = logging.getLogger(__name__)

DEFAULT_RULES: Dict[str, Any] = {
    "title": {"min_length": 30, "max_length": 60},
    "meta_description": {"min_length": 120, "max_length": 160},
    "points": {"good": 10, "warning": 5, "error": 0},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_rules(path: Optional[Path] = None) -> Dict[str, Any]:
    """Indlæser tærskler/point fra YAML. Manglende eller ugyldig fil giver standardværdier."""
    rules_path = Path(path) if path else config.RULES_PATH
    try:
        with open(rules_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except FileNotFoundError:
        log.error("Regel-fil ikke fundet på: %s", rules_path)
        return copy.deepcopy(DEFAULT_RULES)
    except yaml.YAMLError as e:
        log.error("Fejl ved parsing af YAML-regel-fil: %s", e)
        return copy.deepcopy(DEFAULT_RULES)
    if not isinstance(loaded, dict):
        log.error("Regel-fil %s har ikke et mapping på topniveau", rules_path)
        return copy.deepcopy(DEFAULT_RULES)
    return _merge(DEFAULT_RULES, loaded)


_RULES_CACHE: Optional[Dict[str, Any]] = None


def get_rules() -> Dict[str, Any]:
    global _RULES_CACHE
    if _RULES_CACHE is None:
        _RULES_CACHE = load_rules()
    return _RULES_CACHE


def _check(name: str, status: str, description: str) -> SEOCheck:
    return {"name": name, "status": status, "description": description}


def text_length(value: str) -> int:
    """Længde i UTF-16-enheder, som browserens `.length` (emoji tæller 2)."""
    return len(value.encode("utf-16-le")) // 2


def _length_check(name: str, label: str, value: Optional[str], lo: int, hi: int, good_text: str, missing_text: str) -> SEOCheck:
    if not value:
        return _check(name, "error", missing_text)
    length = text_length(value)
    if lo <= length <= hi:
        return _check(name, "good", good_text)
    return _check(name, "warning", f"{label} length is {length} characters (optimal: {lo}-{hi})")


def evaluate_checks(
    meta_tags: MetaTagSet,
    headings: HeadingHierarchy,
    structured_data: List[StructuredDataItem],
    has_robots_txt: bool,
    has_sitemap: bool,
    rules: Optional[Dict[str, Any]] = None,
) -> List[SEOCheck]:
    """Kører de ni faste tjek i fast rækkefølge. Kun title/description/H1 kan give 'error'."""
    rules = rules or get_rules()
    t, d = rules["title"], rules["meta_description"]
    checks: List[SEOCheck] = []

    tmin, tmax = t["min_length"], t["max_length"]
    checks.append(_length_check(
        "Title Tag", "Title tag", meta_tags.get("title"), tmin, tmax,
        f"Title tag is present and optimal length ({tmin}-{tmax} characters)",
        "Missing title tag",
    ))

    dmin, dmax = d["min_length"], d["max_length"]
    checks.append(_length_check(
        "Meta Description", "Meta description", meta_tags.get("description"), dmin, dmax,
        f"Meta description is present and optimal length ({dmin}-{dmax} characters)",
        "Missing meta description",
    ))

    h1 = headings.get("h1", 0)
    if h1 == 1:
        checks.append(_check("H1 Tag", "good", "Exactly one H1 tag found"))
    elif h1 == 0:
        checks.append(_check("H1 Tag", "error", "No H1 tag found"))
    else:
        checks.append(_check("H1 Tag", "warning", f"Multiple H1 tags found ({h1})"))

    if meta_tags.get("og:title") and meta_tags.get("og:description"):
        checks.append(_check("Open Graph", "good", "Open Graph meta tags are present"))
    else:
        checks.append(_check("Open Graph", "warning", "Missing or incomplete Open Graph meta tags"))

    if meta_tags.get("twitter:card"):
        checks.append(_check("Twitter Card", "good", "Twitter Card meta tags are present"))
    else:
        checks.append(_check("Twitter Card", "warning", "Missing Twitter Card meta tags"))

    if meta_tags.get("canonical"):
        checks.append(_check("Canonical URL", "good", "Canonical URL is specified"))
    else:
        checks.append(_check("Canonical URL", "warning", "Missing canonical URL"))

    checks.append(_check(
        "Robots.txt",
        "good" if has_robots_txt else "warning",
        "Robots.txt file is present" if has_robots_txt else "Robots.txt file not found",
    ))

    checks.append(_check(
        "Sitemap",
        "good" if has_sitemap else "warning",
        "XML sitemap is present" if has_sitemap else "XML sitemap not found",
    ))

    if structured_data:
        checks.append(_check("Structured Data", "good", f"{len(structured_data)} structured data item(s) found"))
    else:
        checks.append(_check("Structured Data", "warning", "No structured data found"))

    return checks
