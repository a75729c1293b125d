"""
schemas.py — Pydantic Models
─────────────────────────────
All request/response shapes for the FastAPI app.

Python attributes are snake_case; the JSON on the wire is camelCase
(`metaDescription`, `ogTags`, `characterCount`, ...), produced by the
shared alias generator below. Every model here appears in the
interactive API docs at /docs.
"""

from __future__ import annotations
from datetime import datetime
from typing import Literal, Optional

from pydantic import (
    AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError,
    field_validator, model_serializer,
)
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


_URL_ADAPTER = TypeAdapter(AnyUrl)
INVALID_URL_MESSAGE = "Please enter a valid URL starting with http:// or https://"


# ─────────────────────────────────────────────────────────────────────────────
# REQUEST models  (what the client sends TO the API)
# ─────────────────────────────────────────────────────────────────────────────

class AnalyzeRequest(BaseModel):
    """
    Body sent by the frontend when starting an analysis.

    Example JSON:
        { "url": "https://example.com" }
    """
    url: str = Field(
        ...,
        description="Absolute URL of the page to analyse (must include http:// or https://)",
        examples=["https://example.com"],
        max_length=2048,
    )

    @field_validator("url")
    @classmethod
    def require_absolute_url(cls, v: str) -> str:
        v = v.strip()
        # pydantic's parser rejects bad hosts, blank hosts and out-of-range ports
        try:
            parsed = _URL_ADAPTER.validate_python(v)
        except ValidationError:
            raise ValueError(INVALID_URL_MESSAGE) from None
        if not parsed.host:
            raise ValueError(INVALID_URL_MESSAGE)
        return v


# ─────────────────────────────────────────────────────────────────────────────
# RESPONSE models  (what the API sends BACK to the client)
# ─────────────────────────────────────────────────────────────────────────────

class SeoCheckModel(_CamelModel):
    """One pass/warning/fail verdict. Optional keys are left out when unset."""
    name:            str
    status:          Literal["pass", "warning", "fail"]
    message:         str
    value:           Optional[str] = None
    character_count: Optional[int] = None
    recommendation:  Optional[str] = None

    @model_serializer(mode="wrap")
    def drop_unset(self, handler):
        return {k: v for k, v in handler(self).items() if v is not None}


class ChecksModel(_CamelModel):
    """Checks grouped by category, in evaluation order."""
    title:            list[SeoCheckModel] = Field(default_factory=list)
    meta_description: list[SeoCheckModel] = Field(default_factory=list)
    open_graph:       list[SeoCheckModel] = Field(default_factory=list)
    twitter_cards:    list[SeoCheckModel] = Field(default_factory=list)


class AnalysisResponse(_CamelModel):
    """Full analysis returned by POST /api/analyze."""
    url:              str
    title:            Optional[str] = None
    meta_description: Optional[str] = None
    og_tags:          dict[str, str] = Field(default_factory=dict)
    twitter_tags:     dict[str, str] = Field(default_factory=dict)
    all_meta_tags:    dict[str, str] = Field(default_factory=dict)
    score:            int = Field(ge=0, le=100, description="Aggregate SEO score (0–100)")
    checks:           ChecksModel
    recommendations:  list[str] = Field(default_factory=list)


class StoredAnalysisModel(AnalysisResponse):
    """An analysis as kept in history."""
    id:         str
    created_at: datetime


# ── Dashboard report ──────────────────────────────────────

class CategoryReportModel(BaseModel):
    status:   Literal["pass", "warning", "fail"]
    passed:   int
    warnings: int
    failed:   int
    total:    int
    label:    str


class TotalsModel(BaseModel):
    passed:   int
    warnings: int
    failed:   int
    total:    int


class CharacterCountModel(BaseModel):
    count:   int
    status:  Literal["missing", "short", "optimal", "long"]
    message: str


class GooglePreviewModel(_CamelModel):
    display_url: str
    link:        str
    title:       str
    description: str


class FacebookPreviewModel(BaseModel):
    domain:      str
    title:       str
    description: str
    image:       Optional[str] = None


class TwitterPreviewModel(FacebookPreviewModel):
    card: Optional[str] = None


class PreviewsModel(BaseModel):
    google:   GooglePreviewModel
    facebook: FacebookPreviewModel
    twitter:  TwitterPreviewModel


class RecommendationCardModel(BaseModel):
    title:       str
    description: str
    snippet:     Optional[str] = None


class RecommendationGroupsModel(BaseModel):
    high:   list[RecommendationCardModel] = Field(default_factory=list)
    medium: list[RecommendationCardModel] = Field(default_factory=list)
    tips:   list[RecommendationCardModel] = Field(default_factory=list)


class ReportResponse(_CamelModel):
    """Dashboard payload returned by GET /api/analyses/{id}/report."""
    id:               str
    created_at:       datetime
    url:              str
    score:            int = Field(ge=0, le=100)
    categories:       dict[str, CategoryReportModel]
    totals:           TotalsModel
    section_scores:   dict[str, int]
    character_counts: dict[str, CharacterCountModel]
    previews:         PreviewsModel
    recommendations:  RecommendationGroupsModel


class ValidationIssue(BaseModel):
    path:    list
    message: str
    code:    str


class ErrorResponse(BaseModel):
    """Standard error shape returned on 4xx/5xx responses."""
    message: str
    errors:  Optional[list[ValidationIssue]] = None


class HealthResponse(BaseModel):
    """Simple health check response."""
    status:  str = "ok"
    version: str = "1.0.0"
    message: str = "SEO Tag Analyzer is running"
