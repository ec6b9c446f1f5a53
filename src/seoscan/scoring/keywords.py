# src/seoscan/scoring/keywords.py

import math
import re
from collections import Counter
from typing import List, Optional

from .schemas import KeywordDensityEntry

# Alt andet end [A-Za-z0-9_] og whitespace bliver til mellemrum
_NON_WORD_RE = re.compile(r"[^A-Za-z0-9_\s]")
_WS_RE = re.compile(r"\s+")

MIN_WORD_LENGTH = 4
MIN_COUNT = 3


def _density(count: int, total: int) -> float:
    # Procent med to decimaler, halve runder op
    return math.floor(count / total * 10000 + 0.5) / 100


def tokenize(text: str) -> List[str]:
    clean = _WS_RE.sub(" ", _NON_WORD_RE.sub(" ", (text or "").lower())).strip()
    return [w for w in clean.split(" ") if len(w) >= MIN_WORD_LENGTH]


def extract_keyword_density(text: str, limit: Optional[int] = None) -> List[KeywordDensityEntry]:
    """
    Ordfrekvens for ord på mindst fire tegn.

    Nævneren er antallet af ord *efter* længdefiltret, så density er relativ
    til "ord længere end 3 tegn". Kun ord med mere end to forekomster tages
    med; sorteret efter antal (stabilt, første forekomst vinder ved lighed).
    """
    words = tokenize(text)
    total = len(words)
    if not total:
        return []

    entries: List[KeywordDensityEntry] = [
        {"keyword": word, "count": count, "density": _density(count, total)}
        for word, count in Counter(words).items()
        if count >= MIN_COUNT
    ]
    entries.sort(key=lambda e: e["count"], reverse=True)
    return entries[:limit] if limit is not None else entries
