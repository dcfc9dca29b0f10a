"""Best-effort model refinement of baseline queries."""

import json
from typing import Optional

from resource_finder.config import Settings
from resource_finder.models.anchors import AnchorSet
from resource_finder.models.queries import Query, QueryIntent, QuerySource
from resource_finder.models.review import ResourceReviewContext
from resource_finder.services.ai import AIProvider, MalformedCompletionError, parse_json_array
from resource_finder.services.logging import logger, sanitize_error
from resource_finder.services.queries.baseline import route_for_intent


EXPANSION_SYSTEM_PROMPT = """You refine search queries for a learner studying a piece of {language} code.

CONSTRAINTS:
- Propose at most {max_queries} refinement queries.
- Every query MUST be about one of these symbols: {symbols}.
- Invent nothing new: no libraries, APIs or topics that are not in the baseline queries.
- Align with the learning goal: {learning_goal}
- Content priority: {content_priority}

Return ONLY a JSON array, no other text:
[{{"query": "...", "intent": "documentation|tutorial|troubleshooting|general", "weight": 0.6-0.8}}]"""

EXPANSION_USER_PROMPT = """BASELINE QUERIES:
{baseline}

EXPANSION HINTS:
{hints}

Generate up to {max_queries} refinement queries."""

DEFAULT_EXPANSION_WEIGHT = 0.7
MIN_EXPANSION_WEIGHT = 0.6
MAX_EXPANSION_WEIGHT = 0.8


class QueryExpander:
    """
    Adds a few model-proposed queries on top of the baseline.

    The baseline list is always returned intact: expansion is skipped when
    disabled, when no model is configured, or when there are no concrete
    symbols to refine, and any failure during the call falls back to the
    baseline unchanged.
    """

    def __init__(self, settings: Settings, ai_provider: Optional[AIProvider] = None):
        self.settings = settings
        self.ai_provider = ai_provider

    async def expand(
        self,
        baseline: list[Query],
        review_context: ResourceReviewContext,
        anchors: AnchorSet,
    ) -> list[Query]:
        if anchors.metadata.expansion_disabled:
            logger.info("[Expansion] Skipped (disabled for this anchor set)")
            return baseline
        if self.ai_provider is None:
            logger.info("[Expansion] Skipped (no model configured)")
            return baseline
        symbols = anchors.concrete_symbols
        if not anchors.metadata.has_concrete_symbols or not symbols:
            logger.info("[Expansion] Skipped (no concrete symbols)")
            return baseline

        try:
            response = await self.ai_provider.complete(
                prompt=EXPANSION_USER_PROMPT.format(
                    baseline="\n".join(f"- {q.primary}" for q in baseline),
                    hints=", ".join(review_context.expansion_hints) or "none",
                    max_queries=self.settings.max_expansion_queries,
                ),
                system_prompt=EXPANSION_SYSTEM_PROMPT.format(
                    language=anchors.metadata.language,
                    max_queries=self.settings.max_expansion_queries,
                    symbols=", ".join(symbols),
                    learning_goal=review_context.learning_goal,
                    content_priority=json.dumps(review_context.content_priority),
                ),
                max_tokens=self.settings.expansion_max_tokens,
                temperature=self.settings.expansion_temperature,
            )
            expansions = self._parse_expansions(response, baseline, symbols)
        except Exception as e:
            logger.warning(f"[Expansion] Failed, using baseline only: {sanitize_error(e)}")
            return baseline

        logger.info(f"[Expansion] Added {len(expansions)} refinement queries")
        return baseline + expansions

    def _parse_expansions(
        self,
        response: str,
        baseline: list[Query],
        symbols: list[str],
    ) -> list[Query]:
        items = parse_json_array(response)

        known = {q.primary.strip().lower() for q in baseline}
        lowered_symbols = [s.lower() for s in symbols]
        expansions: list[Query] = []

        for item in items:
            if not isinstance(item, dict) or not isinstance(item.get("query"), str):
                raise MalformedCompletionError(f"Expansion item is not a query object: {item!r}")

            text = " ".join(item["query"].split())
            if not text or text.lower() in known:
                continue
            # Out-of-scope proposals are dropped rather than trusted
            if not any(symbol in text.lower() for symbol in lowered_symbols):
                logger.debug(f"[Expansion] Dropped out-of-scope query: {text}")
                continue

            try:
                intent = QueryIntent(str(item.get("intent", "general")).lower())
            except ValueError:
                intent = QueryIntent.GENERAL

            weight = item.get("weight", DEFAULT_EXPANSION_WEIGHT)
            if isinstance(weight, bool) or not isinstance(weight, (int, float)):
                weight = DEFAULT_EXPANSION_WEIGHT
            weight = min(max(float(weight), MIN_EXPANSION_WEIGHT), MAX_EXPANSION_WEIGHT)

            route = route_for_intent(intent)
            expansions.append(Query(
                primary=text,
                intent=route.intent,
                weight=weight,
                source=QuerySource.EXPANSION,
                content_type=route.content_type,
                search_engine=route.search_engine,
                reason="llm-refinement",
            ))
            known.add(text.lower())

            if len(expansions) >= self.settings.max_expansion_queries:
                break

        return expansions
