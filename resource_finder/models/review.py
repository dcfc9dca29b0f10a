"""Upstream review text and the learning context derived from it."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from resource_finder.models.code_context import CamelModel


REVIEW_FIELDS = ("complexity", "purpose", "behavioral", "risks", "edge_cases", "summary")


class ReviewResponse(CamelModel):
    """Free-text review produced by the upstream model. Untrusted."""

    complexity: str = ""
    purpose: str = ""
    behavioral: str = ""
    risks: str = ""
    edge_cases: str = ""
    summary: str = ""
    raw: Optional[str] = None  # unparsed model output

    @model_validator(mode="before")
    @classmethod
    def _wrap_unparsed(cls, data: Any) -> Any:
        # A bare string is review output the caller could not split into fields
        if isinstance(data, str):
            return {"raw": data}
        return data

    @field_validator(*REVIEW_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, value):
        if value is None:
            return ""
        if isinstance(value, list):
            return "\n".join(str(item) for item in value)
        return str(value)


class ReviewQualityStatus(str, Enum):
    """Trust level of the upstream review."""

    VALID = "valid"  # no violations
    DEGRADED = "degraded"  # 1-2 violations
    INVALID = "invalid"  # more than 2 violations


class ReviewQuality(BaseModel):
    status: ReviewQualityStatus
    reasons: list[str] = Field(default_factory=list)


class ResourceReviewContext(BaseModel):
    """Learning-oriented summary used to steer expansion and ranking."""

    learning_goal: str
    content_priority: dict[str, float] = Field(default_factory=dict)
    expansion_hints: list[str] = Field(default_factory=list)
