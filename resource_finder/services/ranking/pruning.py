"""Collapse duplicates and bound the candidate set before ranking."""

from resource_finder.models.resources import Resource, ResourceType
from resource_finder.services.logging import logger

DEFAULT_PRUNE_MAX = 15


def deduplicate_resources(resources: list[Resource]) -> list[Resource]:
    """
    Collapse resources sharing a URL into one record.

    The last occurrence of a URL wins, at the position where that URL was
    first seen. Arrival order is the order of the input list.
    """
    by_url: dict[str, Resource] = {}
    for resource in resources:
        by_url[resource.url] = resource
    return list(by_url.values())


def _pre_rank_key(resource: Resource) -> tuple[int, float]:
    tier = 0 if resource.type == ResourceType.DOCUMENTATION else 1
    return tier, -(resource.raw_relevance or 0.0)


def pre_rank(resources: list[Resource]) -> list[Resource]:
    """Documentation first, then by descending raw relevance. Stable."""
    return sorted(resources, key=_pre_rank_key)


def prune_for_ranking(resources: list[Resource], max_resources: int = DEFAULT_PRUNE_MAX) -> list[Resource]:
    """Pre-rank and keep at most `max_resources` for the ranking stage."""
    pruned = pre_rank(resources)[: max(max_resources, 0)]
    logger.info(f"[Pruning] {len(resources)} -> {len(pruned)} (pre-ranking)")
    return pruned
