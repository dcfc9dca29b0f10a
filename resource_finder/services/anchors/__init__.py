"""Anchor extraction: review quality, trivial-code detection, anchor sets."""

from resource_finder.services.anchors.quality import validate_review_quality
from resource_finder.services.anchors.trivial import is_trivial_code, trivial_predicates
from resource_finder.services.anchors.extractor import AnchorExtractor, extract_anchors

__all__ = [
    "validate_review_quality",
    "is_trivial_code",
    "trivial_predicates",
    "AnchorExtractor",
    "extract_anchors",
]
