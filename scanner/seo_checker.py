"""
scanner/seo_checker.py
─────────────────────
Scores the meta tags extracted from a webpage against fixed SEO rules:
title, meta description, Open Graph and Twitter Card tags.

Pure and deterministic: no I/O, no clock, no randomness. The same
ExtractedTags always produce the same AnalysisResult.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional


PASS = "pass"
WARNING = "warning"
FAIL = "fail"

REQUIRED_OG_TAGS = ("og:title", "og:description", "og:image", "og:url")
REQUIRED_TWITTER_TAGS = ("twitter:card", "twitter:title", "twitter:description")

PRESENCE_POINTS = 10
OPTIMAL_LENGTH_POINTS = 15
SUBOPTIMAL_LENGTH_POINTS = 10
SOCIAL_TAG_POINTS = 5

SCHEMA_BONUS_THRESHOLD = 80
SCHEMA_RECOMMENDATION = (
    "Consider adding Schema markup to help search engines better understand your content"
)
OG_RECOMMENDATION = "Add missing Open Graph tags for better social media sharing appearance"
TWITTER_RECOMMENDATION = (
    "Add Twitter Card meta tags to improve how your content appears when shared on Twitter"
)


# ──────────────────────────────────────────────
# Data model
# ──────────────────────────────────────────────
@dataclass(frozen=True)
class ExtractedTags:
    url: str
    title: Optional[str] = None
    meta_description: Optional[str] = None
    og_tags: dict = field(default_factory=dict)       # og:* -> content
    twitter_tags: dict = field(default_factory=dict)  # twitter:* -> content
    all_meta_tags: dict = field(default_factory=dict)


@dataclass(frozen=True)
class SeoCheckResult:
    name: str
    status: str                           # "pass" | "warning" | "fail"
    message: str
    value: Optional[str] = None
    character_count: Optional[int] = None
    recommendation: Optional[str] = None


@dataclass(frozen=True)
class AnalysisChecks:
    title: tuple = ()
    meta_description: tuple = ()
    open_graph: tuple = ()
    twitter_cards: tuple = ()

    def categories(self) -> tuple:
        """(key, checks) pairs in evaluation order."""
        return (
            ("title", self.title),
            ("metaDescription", self.meta_description),
            ("openGraph", self.open_graph),
            ("twitterCards", self.twitter_cards),
        )

    def all(self) -> list[SeoCheckResult]:
        return [*self.title, *self.meta_description, *self.open_graph, *self.twitter_cards]


@dataclass(frozen=True)
class AnalysisResult:
    url: str
    title: Optional[str]
    meta_description: Optional[str]
    og_tags: dict
    twitter_tags: dict
    all_meta_tags: dict
    score: int
    checks: AnalysisChecks
    recommendations: tuple = ()


@dataclass(frozen=True)
class _TextRule:
    """Length rule for a single text tag (title or meta description)."""
    label: str                  # "Title" | "Meta description"
    min_length: int
    max_length: int
    present_message: str
    missing_message: str
    optimal_message: str
    short_message: str
    long_message: str
    short_hint: str             # attached to the check
    long_hint: str
    missing_hint: str
    short_advice: str           # added to the global recommendations
    long_advice: str
    missing_advice: str


TITLE_RULE = _TextRule(
    label="Title",
    min_length=30,
    max_length=60,
    present_message="Title tag is present",
    missing_message="Title tag is missing",
    optimal_message="Title length is optimal",
    short_message="Title is too short",
    long_message="Title is too long",
    short_hint="Extend your title to 30-60 characters for better SEO",
    long_hint="Shorten your title to under 60 characters",
    missing_hint="Add a descriptive title tag to your page",
    short_advice="Extend your title to 30-60 characters for better SEO performance",
    long_advice="Shorten your title to under 60 characters to prevent truncation in search results",
    missing_advice="Add a descriptive title tag (30-60 characters) that includes your target keywords",
)

META_DESCRIPTION_RULE = _TextRule(
    label="Meta description",
    min_length=150,
    max_length=160,
    present_message="Meta description is present",
    missing_message="Meta description is missing",
    optimal_message="Meta description length is optimal",
    short_message="Meta description is too short",
    long_message="Meta description is too long",
    short_hint="Extend to 150-160 characters for better click-through rates",
    long_hint="Shorten to under 160 characters",
    missing_hint="Add a compelling meta description (150-160 characters)",
    short_advice=(
        "Extend your meta description to 150-160 characters to provide more context "
        "and improve click-through rates"
    ),
    long_advice=(
        "Shorten your meta description to under 160 characters to prevent truncation "
        "in search results"
    ),
    missing_advice=(
        "Add a compelling meta description (150-160 characters) that summarizes your page content"
    ),
)


# ──────────────────────────────────────────────
# Scoring engine
# ──────────────────────────────────────────────

def evaluate(tags: ExtractedTags) -> AnalysisResult:
    """
    Run every SEO rule against the extracted tags.

    Categories are evaluated in a fixed order (title, meta description,
    Open Graph, Twitter Cards) and so are the checks inside each one.
    The score is the sum of the category points, clamped to 0..100;
    with the current rules the best reachable score is 85.
    """
    recommendations: list[str] = []

    title_checks, title_points = _check_text(tags.title, TITLE_RULE, recommendations)
    desc_checks, desc_points = _check_text(tags.meta_description, META_DESCRIPTION_RULE, recommendations)

    og_checks, og_points = _check_social(
        tags.og_tags, REQUIRED_OG_TAGS, "Add {} meta tag for better social media sharing")
    if og_points < SOCIAL_TAG_POINTS * len(REQUIRED_OG_TAGS):
        recommendations.append(OG_RECOMMENDATION)

    twitter_checks, twitter_points = _check_social(
        tags.twitter_tags, REQUIRED_TWITTER_TAGS, "Add {} meta tag for Twitter sharing")
    if twitter_points == 0:
        recommendations.append(TWITTER_RECOMMENDATION)

    score = title_points + desc_points + og_points + twitter_points
    score = max(0, min(100, score))

    if score >= SCHEMA_BONUS_THRESHOLD:
        recommendations.append(SCHEMA_RECOMMENDATION)

    return AnalysisResult(
        url=tags.url,
        title=tags.title,
        meta_description=tags.meta_description,
        og_tags=dict(tags.og_tags),
        twitter_tags=dict(tags.twitter_tags),
        all_meta_tags=dict(tags.all_meta_tags),
        score=score,
        checks=AnalysisChecks(
            title=tuple(title_checks),
            meta_description=tuple(desc_checks),
            open_graph=tuple(og_checks),
            twitter_cards=tuple(twitter_checks),
        ),
        recommendations=tuple(recommendations),
    )


analyze = evaluate


def classify_length(length: int, min_length: int, max_length: int) -> str:
    """Return "optimal", "short" or "long" for a non-empty text length."""
    if length < min_length:
        return "short"
    if length > max_length:
        return "long"
    return "optimal"


def _check_text(text: Optional[str], rule: _TextRule, recommendations: list[str]) -> tuple[list, int]:
    # An empty string counts as a missing tag.
    if not text:
        recommendations.append(rule.missing_advice)
        return [SeoCheckResult(
            name=f"{rule.label} presence",
            status=FAIL,
            message=rule.missing_message,
            recommendation=rule.missing_hint,
        )], 0

    checks = [SeoCheckResult(
        name=f"{rule.label} presence",
        status=PASS,
        message=rule.present_message,
        value=text,
    )]
    points = PRESENCE_POINTS

    length = len(text)
    band = classify_length(length, rule.min_length, rule.max_length)
    if band == "optimal":
        checks.append(SeoCheckResult(
            name=f"{rule.label} length",
            status=PASS,
            message=rule.optimal_message,
            value=text,
            character_count=length,
        ))
        points += OPTIMAL_LENGTH_POINTS
    else:
        message, hint, advice = (
            (rule.short_message, rule.short_hint, rule.short_advice) if band == "short"
            else (rule.long_message, rule.long_hint, rule.long_advice)
        )
        checks.append(SeoCheckResult(
            name=f"{rule.label} length",
            status=WARNING,
            message=message,
            value=text,
            character_count=length,
            recommendation=hint,
        ))
        points += SUBOPTIMAL_LENGTH_POINTS
        recommendations.append(advice)

    return checks, points


def _check_social(tags: dict, required: tuple, hint_template: str) -> tuple[list, int]:
    checks: list[SeoCheckResult] = []
    points = 0
    for tag in required:
        content = tags.get(tag)
        if content:
            checks.append(SeoCheckResult(
                name=tag,
                status=PASS,
                message=f"{tag} is present",
                value=content,
            ))
            points += SOCIAL_TAG_POINTS
        else:
            checks.append(SeoCheckResult(
                name=tag,
                status=FAIL,
                message=f"{tag} is missing",
                recommendation=hint_template.format(tag),
            ))
    return checks, points
