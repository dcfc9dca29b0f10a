"""Learning resources and the /resources request/response envelopes."""

from enum import Enum
from typing import Any, Optional

from pydantic import Field

from resource_finder.models.code_context import CamelModel, CodeContext
from resource_finder.models.review import ReviewResponse


class ResourceType(str, Enum):
    DOCUMENTATION = "documentation"
    ARTICLE = "article"
    VIDEO = "video"
    QA = "qa"
    REPOSITORY = "repository"


class RelevanceScale(str, Enum):
    """Meaning of a resource's raw_relevance, which differs per source."""

    ENGINE_SCORE = "engine-score"  # the search engine's own confidence
    SOURCE_PRIOR = "source-prior"  # fixed prior for an authoritative source
    NONE = "none"  # source provides no comparable score


class Resource(CamelModel):
    type: ResourceType
    title: str
    url: str
    description: str = ""
    intent: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    raw_relevance: Optional[float] = None
    relevance_score: Optional[float] = None
    ranked: bool = False


# --- Request ---


class ResourceRequest(CamelModel):
    # Optional here so the route can answer 400 instead of a validation error
    code_context: Optional[CodeContext] = None
    source_code: str = ""
    user_intent: Optional[str] = None
    review_response: Optional[ReviewResponse] = None


# --- Responses ---


class PipelineTelemetry(CamelModel):
    anchor_count: int
    has_concrete_symbols: bool
    review_quality: str
    baseline_queries: int
    expanded_queries: int
    expansion_disabled: bool
    resources_pruned: int
    resources_ranked: int
    ranked_by_model: bool = False


class RoutingTelemetry(CamelModel):
    doc_engine: int = 0
    general_engine: int = 0
    qa_engine: int = 0
    code_engine: int = 0


class QueryTrace(CamelModel):
    query: str
    engine: str
    source: str


class ResourceMetadata(CamelModel):
    total_fetched: int
    total_returned: int
    pipeline: PipelineTelemetry
    routing: RoutingTelemetry
    queries: list[QueryTrace]
    timestamp: str


class ResourceResponse(CamelModel):
    success: bool = True
    resources: list[Resource]
    metadata: ResourceMetadata


class ShortCircuitMetadata(CamelModel):
    short_circuit: bool = True
    reason: Optional[str] = None
    message: str


class ShortCircuitResponse(CamelModel):
    success: bool = True
    resources: list[Resource] = Field(default_factory=list)
    metadata: ShortCircuitMetadata


class FailureMetadata(CamelModel):
    error_type: str
    timestamp: str


class FailureResponse(CamelModel):
    success: bool = False
    error: str
    fallback: bool = True
    metadata: FailureMetadata
