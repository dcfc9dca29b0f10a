"""Deduplication, pruning and ranking of retrieved resources."""

from resource_finder.services.ranking.pruning import deduplicate_resources, pre_rank, prune_for_ranking
from resource_finder.services.ranking.ranker import (
    ResourceRanker,
    apply_position_decay,
    position_decay_score,
)

__all__ = [
    "deduplicate_resources",
    "pre_rank",
    "prune_for_ranking",
    "ResourceRanker",
    "apply_position_decay",
    "position_decay_score",
]
