# src/seoscan/utils/urls.py
import logging
import re
from urllib.parse import urlsplit

log = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_url(raw: str) -> str:
    """
    Trim, fjern én afsluttende '/', ret dobbelt-skema og tilføj https:// hvis
    input mangler et http(s)-skema.
    """
    if not raw:
        return raw
    url = raw.strip()
    if url.endswith("/"):
        url = url[:-1]

    lowered = url.lower()
    if lowered.startswith(("https://https://", "http://http://", "https://http://", "http://https://")):
        fixed = url.split("://", 1)[1]
        log.warning("Fixed invalid URL: %s -> %s", url, fixed)
        url = fixed

    if url and not _SCHEME_RE.match(url):
        url = f"https://{url}"
    return url


def origin_of(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"
