"""
report/recommendations.py
─────────────────────────
Turns an AnalysisResult into recommendation cards grouped by priority
(high, medium, tips), each with an explanation and, where it helps,
a copy-paste HTML snippet.

The cards come from a small knowledge base keyed on card title; the
engine's own recommendation strings are appended to the tips.
"""

from __future__ import annotations
from scanner.seo_checker import AnalysisResult, TITLE_RULE, META_DESCRIPTION_RULE


# ──────────────────────────────────────────────────────────────────────────────
# Recommendation knowledge base
# Maps card titles → explanation + example markup
# ──────────────────────────────────────────────────────────────────────────────

GUIDES: dict[str, dict] = {
    "Add Twitter Card Meta Tags": {
        "description": (
            "Your website is missing Twitter Card meta tags, which means your content "
            "won't display properly when shared on Twitter."
        ),
        "snippet": (
            '<meta name="twitter:card" content="summary_large_image">\n'
            '<meta name="twitter:title" content="Your Page Title">\n'
            '<meta name="twitter:description" content="Your page description">'
        ),
    },
    "Add Title Tag": {
        "description": (
            "Your page is missing a title tag, which is crucial for SEO and user experience."
        ),
        "snippet": "<title>Your Page Title (30-60 characters)</title>",
    },
    "Add Meta Description": {
        "description": (
            "Your page is missing a meta description, which appears in search results "
            "and affects click-through rates."
        ),
        "snippet": '<meta name="description" content="Your page description (150-160 characters)">',
    },
    "Extend Meta Description Length": {
        "description": (
            "Your meta description is {count} characters. Extend it to 150-160 characters "
            "to provide more context and improve click-through rates."
        ),
    },
    "Optimize Title Length": {
        "description": (
            "Your title is {count} characters. "
            "Optimize it to 30-60 characters for best search engine display."
        ),
    },
    "Consider Adding Schema Markup": {
        "description": (
            "Implement structured data to help search engines better understand your content "
            "and potentially earn rich snippets."
        ),
    },
    "Optimize Images for Social Sharing": {
        "description": (
            "Ensure your Open Graph and Twitter Card images are optimized "
            "(1200x630px for optimal display across platforms)."
        ),
    },
}

STANDING_TIPS = ("Consider Adding Schema Markup", "Optimize Images for Social Sharing")


# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────

def prioritized_recommendations(result: AnalysisResult) -> dict:
    """
    Group recommendation cards by priority.

    Returns:
        {"high": [card, ...], "medium": [card, ...], "tips": [card, ...]}
    """
    title = result.title
    description = result.meta_description

    high = []
    if not result.twitter_tags.get("twitter:card"):
        high.append(_card("Add Twitter Card Meta Tags"))
    if not title:
        high.append(_card("Add Title Tag"))
    if not description:
        high.append(_card("Add Meta Description"))

    medium = []
    if description and len(description) < META_DESCRIPTION_RULE.min_length:
        medium.append(_card("Extend Meta Description Length", count=len(description)))
    if title and not TITLE_RULE.min_length <= len(title) <= TITLE_RULE.max_length:
        medium.append(_card("Optimize Title Length", count=len(title)))

    tips = [_card(name) for name in STANDING_TIPS]
    tips += [{"title": "Recommendation", "description": text, "snippet": None}
             for text in result.recommendations]

    return {"high": high, "medium": medium, "tips": tips}


def _card(title: str, **values) -> dict:
    guide = GUIDES[title]
    return {
        "title":       title,
        "description": guide["description"].format(**values),
        "snippet":     guide.get("snippet"),
    }
