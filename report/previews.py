"""
report/previews.py
──────────────────
What a link to the analysed page would look like in Google results,
on Facebook and on Twitter. Social previews fall back from the
platform tag to the generic tag to a placeholder.
"""
from __future__ import annotations
from urllib.parse import urlparse

from scanner.seo_checker import AnalysisResult


NO_TITLE = "No title available"
NO_DESCRIPTION = "No description available"
NO_META_DESCRIPTION = "No meta description available"


def display_url(url: str) -> str:
    """Hostname of `url`, or the raw string when it has none."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        host = None
    return host or url


def google_preview(result: AnalysisResult) -> dict:
    return {
        "displayUrl":  display_url(result.url),
        "link":        result.url,
        "title":       result.title or NO_TITLE,
        "description": result.meta_description or NO_META_DESCRIPTION,
    }


def facebook_preview(result: AnalysisResult) -> dict:
    og = result.og_tags
    return {
        "domain":      display_url(result.url).upper(),
        "title":       og.get("og:title") or result.title or NO_TITLE,
        "description": og.get("og:description") or result.meta_description or NO_DESCRIPTION,
        "image":       og.get("og:image") or None,
    }


def twitter_preview(result: AnalysisResult) -> dict:
    fb = facebook_preview(result)
    tw = result.twitter_tags
    return {
        "domain":      fb["domain"].lower(),
        "card":        tw.get("twitter:card") or None,
        "title":       tw.get("twitter:title") or fb["title"],
        "description": tw.get("twitter:description") or fb["description"],
        "image":       tw.get("twitter:image") or fb["image"],
    }
