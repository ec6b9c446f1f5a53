# src/seoscan/errors.py

__all__ = ["SeoScanError", "BrowserLaunchError", "NavigationError", "ExtractionError"]


class SeoScanError(Exception):
    """Fælles basisklasse for fatale fejl i SEO-pipelinen."""


class BrowserLaunchError(SeoScanError):
    """Headless-browseren kunne ikke startes."""


class NavigationError(SeoScanError):
    """Siden kunne ikke indlæses (timeout, DNS, ugyldig URL ...)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Navigation til {url} fejlede: {reason}")
        self.url = url
        self.reason = reason


class ExtractionError(SeoScanError):
    """En DOM-evaluering fejlede efter at siden var indlæst."""

    def __init__(self, step: str, url: str, reason: str):
        super().__init__(f"{step} fejlede for {url}: {reason}")
        self.step = step
        self.url = url
        self.reason = reason
