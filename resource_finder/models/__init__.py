from resource_finder.models.code_context import (
    CodeContext,
    ReviewIR,
    LibraryInfo,
    FrameworkInfo,
    MagicValue,
    DecisionRule,
)
from resource_finder.models.review import (
    ReviewResponse,
    ReviewQuality,
    ReviewQualityStatus,
    ResourceReviewContext,
)
from resource_finder.models.anchors import Anchor, AnchorMetadata, AnchorSet, AnchorType
from resource_finder.models.queries import (
    ContentType,
    Query,
    QueryIntent,
    QuerySource,
    SearchEngineKind,
)
from resource_finder.models.resources import (
    RelevanceScale,
    Resource,
    ResourceRequest,
    ResourceResponse,
    ResourceType,
    ShortCircuitResponse,
    FailureResponse,
)

__all__ = [
    "CodeContext",
    "ReviewIR",
    "LibraryInfo",
    "FrameworkInfo",
    "MagicValue",
    "DecisionRule",
    "ReviewResponse",
    "ReviewQuality",
    "ReviewQualityStatus",
    "ResourceReviewContext",
    "Anchor",
    "AnchorMetadata",
    "AnchorSet",
    "AnchorType",
    "ContentType",
    "Query",
    "QueryIntent",
    "QuerySource",
    "SearchEngineKind",
    "RelevanceScale",
    "Resource",
    "ResourceRequest",
    "ResourceResponse",
    "ResourceType",
    "ShortCircuitResponse",
    "FailureResponse",
]
