from .analyzer import analyze_multiple_urls, close_browser, extract_seo_data
from .browser import BrowserSession, acquire_browser, release_browser
from .schemas import SEOReport, to_wire

__all__ = [
    "extract_seo_data", "close_browser", "analyze_multiple_urls",
    "BrowserSession", "acquire_browser", "release_browser",
    "SEOReport", "to_wire",
]
