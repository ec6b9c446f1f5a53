# src/seoscan/scoring/scorer.py

import logging
import math
from typing import Any, Dict, List, Optional

from .rules import get_rules
from .schemas import SEOCheck

log = logging.getLogger(__name__)


def calculate_seo_score(checks: List[SEOCheck], rules: Optional[Dict[str, Any]] = None) -> int:
    """
    Summerer point pr. status og normaliserer til 0-100 mod
    ``points.good * len(checks)``. Afrunding: halv op.
    """
    if not checks:
        return 0
    points = (rules or get_rules())["points"]
    good = points.get("good", 10)
    if good <= 0:
        log.warning("points.good er %s; score kan ikke normaliseres", good)
        return 0

    raw = sum(points.get(c["status"], 0) for c in checks)
    max_score = good * len(checks)
    score = math.floor(raw / max_score * 100 + 0.5)
    return max(0, min(100, score))
