"""
report/summary.py
─────────────────
Numbers the dashboard shows next to an analysis: per-category status
badges, "x/y checks passed" counters, totals and the two section
scores. Everything here is derived from an AnalysisResult; nothing
changes the main 0-100 score.
"""
from __future__ import annotations
import math
from typing import Iterable, Optional

from scanner.seo_checker import (
    AnalysisResult, SeoCheckResult, PASS, WARNING, FAIL,
    TITLE_RULE, META_DESCRIPTION_RULE, classify_length,
)
from report.previews        import google_preview, facebook_preview, twitter_preview
from report.recommendations import prioritized_recommendations


SEO_SECTION = "Search Engine Optimization"
SOCIAL_SECTION = "Social Media Optimization"


def overall_status(checks: Iterable[SeoCheckResult]) -> str:
    """Worst status wins: any fail -> "fail", else any warning -> "warning", else "pass"."""
    statuses = {c.status for c in checks}
    if FAIL in statuses:
        return FAIL
    if WARNING in statuses:
        return WARNING
    return PASS


def category_stats(checks: Iterable[SeoCheckResult]) -> dict:
    checks = list(checks)
    counts = _count(checks)
    return {
        **counts,
        "label": "{}/{} checks passed".format(counts["passed"], counts["total"]),
    }


def aggregate_stats(result: AnalysisResult) -> dict:
    return _count(result.checks.all())


def section_scores(result: AnalysisResult) -> dict:
    c = result.checks
    return {
        SEO_SECTION:    _percent_passed([*c.title, *c.meta_description]),
        SOCIAL_SECTION: _percent_passed([*c.open_graph, *c.twitter_cards]),
    }


def character_count_status(text: Optional[str], optimal: tuple) -> dict:
    low, high = optimal
    if not text:
        return {"count": 0, "status": "missing", "message": "Missing"}

    count = len(text)
    band = classify_length(count, low, high)
    if band == "optimal":
        message = "Optimal ({}-{} characters)".format(low, high)
    elif band == "short":
        message = "Too short (recommended: {}-{} characters)".format(low, high)
    else:
        message = "Too long (recommended: {}-{} characters)".format(low, high)
    return {"count": count, "status": band, "message": message}


def build_report(result: AnalysisResult) -> dict:
    """Everything the results page needs, in one payload."""
    return {
        "url":   result.url,
        "score": result.score,
        "categories": {
            key: {"status": overall_status(checks), **category_stats(checks)}
            for key, checks in result.checks.categories()
        },
        "totals":         aggregate_stats(result),
        "sectionScores":  section_scores(result),
        "characterCounts": {
            "title": character_count_status(
                result.title, (TITLE_RULE.min_length, TITLE_RULE.max_length)),
            "metaDescription": character_count_status(
                result.meta_description,
                (META_DESCRIPTION_RULE.min_length, META_DESCRIPTION_RULE.max_length)),
        },
        "previews": {
            "google":   google_preview(result),
            "facebook": facebook_preview(result),
            "twitter":  twitter_preview(result),
        },
        "recommendations": prioritized_recommendations(result),
    }


def _count(checks: list) -> dict:
    passed = sum(1 for c in checks if c.status == PASS)
    warnings = sum(1 for c in checks if c.status == WARNING)
    failed = sum(1 for c in checks if c.status == FAIL)
    return {"passed": passed, "warnings": warnings, "failed": failed, "total": len(checks)}


def _percent_passed(checks: list) -> int:
    if not checks:
        return 0
    passed = sum(1 for c in checks if c.status == PASS)
    # Half-up, so 12.5 -> 13 rather than banker's rounding.
    return math.floor(passed / len(checks) * 100 + 0.5)
