"""Model-based relevance scoring with a deterministic position-decay fallback."""

import json
from typing import Optional

from resource_finder.config import Settings
from resource_finder.models.resources import Resource
from resource_finder.models.review import ResourceReviewContext
from resource_finder.services.ai import AIProvider, MalformedCompletionError, parse_json_array
from resource_finder.services.logging import logger, sanitize_error


RANKING_SYSTEM_PROMPT = """Score {count} learning resources from 0.0 to 1.0 for the learning goal: "{learning_goal}"

Content priority: {content_priority}

Return ONLY a JSON array with exactly {count} numbers, one per resource in the given order: [0.95, 0.87, ...]"""

DECAY_START = 0.9
DECAY_STEP = 0.05
DECAY_FLOOR = 0.0


def position_decay_score(index: int) -> float:
    """0.90 for the first item, 0.05 less for each one after, never below 0."""
    return round(max(DECAY_START - DECAY_STEP * index, DECAY_FLOOR), 2)


def apply_position_decay(resources: list[Resource]) -> list[Resource]:
    return [
        resource.model_copy(update={"relevance_score": position_decay_score(i), "ranked": False})
        for i, resource in enumerate(resources)
    ]


def _validate_scores(scores: list, expected: int) -> list[Optional[float]]:
    if len(scores) != expected:
        raise MalformedCompletionError(f"Expected {expected} scores, got {len(scores)}")

    validated: list[Optional[float]] = []
    for score in scores:
        if score is None:
            validated.append(None)
        elif isinstance(score, bool) or not isinstance(score, (int, float)):
            raise MalformedCompletionError(f"Score is not a number: {score!r}")
        else:
            validated.append(min(max(float(score), 0.0), 1.0))
    return validated


class ResourceRanker:
    def __init__(self, settings: Settings, ai_provider: Optional[AIProvider] = None):
        self.settings = settings
        self.ai_provider = ai_provider

    async def rank(
        self,
        resources: list[Resource],
        review_context: ResourceReviewContext,
    ) -> list[Resource]:
        """
        Score every resource.

        With a model configured, each resource takes the model's score, or
        its raw relevance when the model returned null for it, or its
        position-decay score. Without a model, on an empty input, or when the
        call fails in any way, every resource gets its position-decay score
        and ranked=False.
        """
        if self.ai_provider is None or not resources:
            logger.info("[Ranking] Skipped, using pre-ranking order")
            return apply_position_decay(resources)

        try:
            response = await self.ai_provider.complete(
                prompt=self._format_resources(resources),
                system_prompt=RANKING_SYSTEM_PROMPT.format(
                    count=len(resources),
                    learning_goal=review_context.learning_goal,
                    content_priority=json.dumps(review_context.content_priority),
                ),
                max_tokens=self.settings.ranking_max_tokens,
                temperature=self.settings.ranking_temperature,
            )
            scores = _validate_scores(parse_json_array(response), len(resources))
        except Exception as e:
            logger.warning(f"[Ranking] Failed, using pre-ranking order: {sanitize_error(e)}")
            return apply_position_decay(resources)

        ranked = []
        for i, (resource, score) in enumerate(zip(resources, scores)):
            if score is None:
                score = resource.raw_relevance if resource.raw_relevance else position_decay_score(i)
            ranked.append(resource.model_copy(update={"relevance_score": score, "ranked": True}))

        logger.info(f"[Ranking] Model scored {len(ranked)} resources")
        return ranked

    def _format_resources(self, resources: list[Resource]) -> str:
        return "\n\n".join(
            f"{i}. [{r.type.value}] {r.title}\n   {(r.description or '')[:100]}"
            for i, r in enumerate(resources)
        )
