"""
scanner/meta_extractor.py
─────────────────────────
Pulls the SEO-relevant tags out of raw HTML:
title, meta description, Open Graph, Twitter Card and the full set
of <meta> tags (plus charset, viewport, canonical and theme-color).
"""

from __future__ import annotations
import re
from typing import Optional
from bs4 import BeautifulSoup

from scanner.seo_checker import ExtractedTags


_OG_PROPERTY = re.compile(r"^og:")
_TWITTER_NAME = re.compile(r"^twitter:")


def extract_tags(html: str, url: str) -> ExtractedTags:
    """Parse `html` and return the tags the scoring engine works on."""
    soup = BeautifulSoup(html, "html.parser")

    title = _title_text(soup)
    meta_description = _meta_description(soup)

    og_tags = _collect(soup, "property", _OG_PROPERTY)
    twitter_tags = _collect(soup, "name", _TWITTER_NAME)

    # ── All meta tags, in discovery order ─────────────────
    all_meta: dict[str, str] = {}
    if title:
        all_meta["title"] = title

    all_meta.update(_collect(soup, "name", True))
    all_meta.update(_collect(soup, "property", True))

    for tag in soup.find_all("meta", attrs={"http-equiv": True}):
        content = tag.get("content")
        if content:
            all_meta["http-equiv:{}".format(tag["http-equiv"])] = content

    charset = soup.find("meta", attrs={"charset": True})
    if charset and charset.get("charset"):
        all_meta["charset"] = charset["charset"]

    viewport = soup.find("meta", attrs={"name": "viewport"})
    if viewport and viewport.get("content"):
        all_meta["viewport"] = viewport["content"]

    canonical = soup.find("link", rel="canonical")
    if canonical and canonical.get("href"):
        all_meta["canonical"] = canonical["href"]

    theme_color = soup.find("meta", attrs={"name": "theme-color"})
    if theme_color and theme_color.get("content"):
        all_meta["theme-color"] = theme_color["content"]

    return ExtractedTags(
        url=url,
        title=title,
        meta_description=meta_description,
        og_tags=og_tags,
        twitter_tags=twitter_tags,
        all_meta_tags=all_meta,
    )


def _title_text(soup: BeautifulSoup) -> Optional[str]:
    title_tag = soup.find("title")
    if not title_tag:
        return None
    return _present(title_tag.get_text())


def _meta_description(soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find("meta", attrs={"name": "description"})
    if not tag:
        return None
    return _present(tag.get("content"))


def _present(text: Optional[str]) -> Optional[str]:
    """Raw `text`, or None when it is empty or only whitespace. Padding counts toward length."""
    if text and text.strip():
        return text
    return None


def _collect(soup: BeautifulSoup, attr: str, match) -> dict[str, str]:
    """Map `attr` -> content for every <meta> whose `attr` matches. Later tags win."""
    found: dict[str, str] = {}
    for tag in soup.find_all("meta", attrs={attr: match}):
        key = tag.get(attr)
        content = tag.get("content")
        if key and content:
            found[key] = content
    return found
