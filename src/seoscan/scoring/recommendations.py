# src/seoscan/scoring/recommendations.py

from typing import List

from .schemas import HeadingHierarchy, MetaTagSet, Recommendation


def _rec(title: str, description: str, priority: str) -> Recommendation:
    return {"title": title, "description": description, "priority": priority}


def generate_recommendations(meta_tags: MetaTagSet, headings: HeadingHierarchy) -> List[Recommendation]:
    """
    Forslag ud fra de rå signaler (ikke tjek-statusserne). Rækkefølgen følger
    triggerne: high → medium → low, og hver trigger fyrer højst én gang.
    """
    recs: List[Recommendation] = []

    # High
    if not meta_tags.get("title"):
        recs.append(_rec("Add Title Tag", "Add a unique, descriptive title tag to every page", "high"))
    if not meta_tags.get("description"):
        recs.append(_rec("Add Meta Description",
                         "Write compelling meta descriptions for better click-through rates", "high"))
    if headings.get("h1", 0) == 0:
        recs.append(_rec("Add H1 Tag", "Include exactly one H1 tag on each page", "high"))

    # Medium
    if not meta_tags.get("og:title") or not meta_tags.get("og:description"):
        recs.append(_rec("Optimize Open Graph Tags",
                         "Add Open Graph meta tags for better social media sharing", "medium"))
    if not meta_tags.get("canonical"):
        recs.append(_rec("Add Canonical URLs",
                         "Specify canonical URLs to prevent duplicate content issues", "medium"))

    # Low
    if not meta_tags.get("twitter:card"):
        recs.append(_rec("Add Twitter Card Tags",
                         "Enhance Twitter sharing with Twitter Card meta tags", "low"))

    return recs
