"""Query synthesis: guaranteed baseline queries and optional model expansion."""

from resource_finder.services.queries.baseline import (
    ANCHOR_ROUTES,
    INTENT_ROUTES,
    BaselineQueryError,
    Route,
    build_baseline_queries,
    route_for_anchor,
    route_for_intent,
)
from resource_finder.services.queries.expansion import QueryExpander

__all__ = [
    "ANCHOR_ROUTES",
    "INTENT_ROUTES",
    "BaselineQueryError",
    "Route",
    "build_baseline_queries",
    "route_for_anchor",
    "route_for_intent",
    "QueryExpander",
]
