"""Classify how far the upstream review text can be trusted."""

import re

from resource_finder.models.review import (
    REVIEW_FIELDS,
    ReviewQuality,
    ReviewQualityStatus,
    ReviewResponse,
)


# Empty, whitespace-only, or a parser-failure marker left by the review step
EMPTY_OR_MARKER_PATTERNS = [
    re.compile(r"^\s*$"),
    re.compile(r"unable to parse", re.IGNORECASE),
    re.compile(r"no issues found\.", re.IGNORECASE),
]

# The field is just an ordinal that leaked from a numbered list
ORDINAL_PATTERNS = [
    re.compile(r"^\s*\d+\.?\s*$"),
    re.compile(r"^(item|section|point)\s*\d+", re.IGNORECASE),
]

MAX_DEGRADED_VIOLATIONS = 2


def validate_review_quality(review: ReviewResponse) -> ReviewQuality:
    """
    Count pattern violations across the six review fields.

    0 violations is valid, 1-2 degraded, more than 2 invalid. Each field can
    contribute at most one violation per pattern family.
    """
    reasons = []

    for field in REVIEW_FIELDS:
        value = getattr(review, field) or ""
        if any(pattern.search(value) for pattern in EMPTY_OR_MARKER_PATTERNS):
            reasons.append(f"{field}-empty-or-invalid")

    for field in REVIEW_FIELDS:
        value = getattr(review, field) or ""
        if any(pattern.search(value) for pattern in ORDINAL_PATTERNS):
            reasons.append(f"{field}-ordinal-contamination")

    if not reasons:
        status = ReviewQualityStatus.VALID
    elif len(reasons) <= MAX_DEGRADED_VIOLATIONS:
        status = ReviewQualityStatus.DEGRADED
    else:
        status = ReviewQualityStatus.INVALID

    return ReviewQuality(status=status, reasons=reasons)
