# src/seoscan/scoring/schemas.py

from typing import Any, Dict, List, Literal, NamedTuple, NotRequired, Optional, TypedDict


__all__ = [
    "MetaTagSet", "HeadingHierarchy", "StructuredDataItem", "KeywordDensityEntry",
    "CheckStatus", "SEOCheck", "Priority", "Recommendation", "SEOReport",
    "UrlAnalysisResult", "ProbeResult", "JsonLdParse", "HEADING_LEVELS", "to_wire",
]

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")

# 'title' og 'canonical' er specialfelter; resten er meta name/property -> content
MetaTagSet = Dict[str, str]


class HeadingHierarchy(TypedDict):
    """Antal overskrifter pr. niveau."""
    h1: int
    h2: int
    h3: int
    h4: int
    h5: int
    h6: int


class StructuredDataItem(TypedDict):
    type: str
    data: Any


class KeywordDensityEntry(TypedDict):
    keyword: str
    count: int
    density: float  # procent, 2 decimaler


CheckStatus = Literal["good", "warning", "error"]
Priority = Literal["high", "medium", "low"]


class SEOCheck(TypedDict):
    name: str
    status: CheckStatus
    description: str


class Recommendation(TypedDict):
    title: str
    description: str
    priority: Priority


class SEOReport(TypedDict):
    """Samlet resultat for én URL."""
    score: int
    meta_tags: MetaTagSet
    keywords: List[KeywordDensityEntry]
    headings: HeadingHierarchy
    has_robots_txt: bool
    has_sitemap: bool
    structured_data: List[StructuredDataItem]
    checks: List[SEOCheck]
    recommendations: List[Recommendation]


class UrlAnalysisResult(TypedDict):
    """Resultat fra batch-kørsel: enten en rapport eller en fejltekst."""
    url: str
    report: NotRequired[SEOReport]
    fetch_error: NotRequired[str]


class ProbeResult(NamedTuple):
    """Udfald af ét HTTP-probe mod robots.txt/sitemap."""
    url: str
    found: bool
    status: Optional[int] = None
    error: Optional[str] = None
    body: Optional[str] = None


class JsonLdParse(NamedTuple):
    """Udfald af parsing af én <script type="application/ld+json">-blok."""
    item: Optional[StructuredDataItem] = None
    skipped: Optional[str] = None  # "malformed" | "no_type"

    @property
    def ok(self) -> bool:
        return self.item is not None


# Nøgler som front-enden forventer (camelCase)
_WIRE_KEYS = {
    "score": "score",
    "meta_tags": "metaTags",
    "keywords": "keywords",
    "headings": "headings",
    "has_robots_txt": "hasRobotsTxt",
    "has_sitemap": "hasSitemap",
    "structured_data": "structuredData",
    "checks": "checks",
    "recommendations": "recommendations",
}


def to_wire(report: SEOReport) -> Dict[str, Any]:
    """Konverterer en SEOReport til det JSON-format API-laget serialiserer."""
    return {wire: report[key] for key, wire in _WIRE_KEYS.items()}
