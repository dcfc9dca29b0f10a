"""Resource recommendation pipeline orchestrator."""

from datetime import datetime, timezone
from typing import Optional, Union

from resource_finder.config import Settings, get_settings
from resource_finder.models.code_context import CodeContext
from resource_finder.models.resources import (
    PipelineTelemetry,
    QueryTrace,
    ResourceMetadata,
    ResourceResponse,
    RoutingTelemetry,
    ShortCircuitMetadata,
    ShortCircuitResponse,
)
from resource_finder.models.review import ReviewResponse
from resource_finder.services.ai import AIProvider, get_optional_ai_provider
from resource_finder.services.anchors import AnchorExtractor
from resource_finder.services.logging import logger
from resource_finder.services.queries import QueryExpander, build_baseline_queries
from resource_finder.services.ranking import ResourceRanker, deduplicate_resources, prune_for_ranking
from resource_finder.services.review_context import ReviewContextBuilder, build_review_context
from resource_finder.services.search import MultiSourceRetriever

SHORT_CIRCUIT_MESSAGE = "Code is too simple for resource recommendations"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResourcePipeline:
    """
    Composes the stages into one request/response cycle.

    Pipeline:
    1. Extract anchors (may short-circuit on trivial code)
    2. Build baseline queries (the only fatal step)
    3. Build the review context
    4. Expand queries (best effort)
    5. Retrieve from all sources concurrently
    6. Deduplicate and prune
    7. Rank (best effort) and return the top results

    Nothing is kept between calls; every structure is built per request.
    """

    def __init__(
        self,
        settings: Settings,
        ai_provider: Optional[AIProvider] = None,
        retriever: Optional[MultiSourceRetriever] = None,
        context_builder: Optional[ReviewContextBuilder] = None,
    ):
        self.settings = settings
        self.extractor = AnchorExtractor(settings)
        self.expander = QueryExpander(settings, ai_provider)
        self.retriever = retriever or MultiSourceRetriever(settings)
        self.ranker = ResourceRanker(settings, ai_provider)
        self.context_builder = context_builder or build_review_context

    async def run(
        self,
        code_context: CodeContext,
        review: ReviewResponse,
        source_code: str = "",
        user_intent: Optional[str] = None,
    ) -> Union[ResourceResponse, ShortCircuitResponse]:
        settings = self.settings
        logger.info(f"[Resources] Starting resource fetch for {code_context.language_name} code")

        # Step 1: Anchors
        anchors = self.extractor.extract(code_context, review)
        if anchors.metadata.short_circuit:
            logger.info("[Resources] Short-circuit: returning no resources")
            return ShortCircuitResponse(
                metadata=ShortCircuitMetadata(
                    reason=anchors.metadata.reason,
                    message=SHORT_CIRCUIT_MESSAGE,
                ),
            )

        # Step 2: Baseline queries
        baseline = build_baseline_queries(anchors, max_queries=settings.max_queries)

        # Step 3: Review context
        review_context = await self.context_builder(code_context, source_code, user_intent, review)

        # Step 4: Expansion
        queries = await self.expander.expand(baseline, review_context, anchors)
        logger.info(
            f"[Resources] {len(queries)} queries "
            f"(baseline={len(baseline)}, expansion={len(queries) - len(baseline)})"
        )

        # Step 5: Retrieval
        fetched, routing = await self.retriever.retrieve(queries)

        # Step 6: Dedup + prune
        unique = deduplicate_resources(fetched)
        logger.info(f"[Resources] Fetched {len(unique)} unique resources")
        pruned = prune_for_ranking(unique, settings.prune_max_resources)

        # Step 7: Rank
        ranked = await self.ranker.rank(pruned, review_context)
        top = sorted(ranked, key=lambda r: r.relevance_score, reverse=True)
        top = top[: settings.max_returned_resources]

        logger.info(f"[Resources] Returning {len(top)} ranked resources")

        return ResourceResponse(
            resources=top,
            metadata=ResourceMetadata(
                total_fetched=len(unique),
                total_returned=len(top),
                pipeline=PipelineTelemetry(
                    anchor_count=anchors.total,
                    has_concrete_symbols=anchors.metadata.has_concrete_symbols,
                    review_quality=anchors.metadata.review_quality,
                    baseline_queries=len(baseline),
                    expanded_queries=len(queries) - len(baseline),
                    expansion_disabled=anchors.metadata.expansion_disabled,
                    resources_pruned=len(unique) - len(pruned),
                    resources_ranked=len(pruned),
                    ranked_by_model=any(r.ranked for r in ranked),
                ),
                routing=RoutingTelemetry(
                    doc_engine=len(routing.docs),
                    general_engine=len(routing.web),
                    qa_engine=len(routing.qa),
                    code_engine=len(routing.code),
                ),
                queries=[
                    QueryTrace(query=q.primary, engine=q.search_engine.value, source=q.source.value)
                    for q in queries
                ],
                timestamp=utc_timestamp(),
            ),
        )


# Global pipeline instance
_pipeline: Optional[ResourcePipeline] = None


def get_resource_pipeline() -> ResourcePipeline:
    """Get the global pipeline, built once from the application settings."""
    global _pipeline
    if _pipeline is None:
        settings = get_settings()
        _pipeline = ResourcePipeline(settings, ai_provider=get_optional_ai_provider(settings))
    return _pipeline
