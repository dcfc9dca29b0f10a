"""Deterministic query synthesis: anchors to guaranteed, engine-routed queries."""

from typing import NamedTuple

from resource_finder.models.anchors import Anchor, AnchorSet, AnchorType
from resource_finder.models.queries import (
    ContentType,
    Query,
    QueryIntent,
    QuerySource,
    SearchEngineKind,
)
from resource_finder.services.logging import logger

DEFAULT_MAX_QUERIES = 15


class BaselineQueryError(RuntimeError):
    """No mandatory anchor to build queries from. Fatal for the request."""


class Route(NamedTuple):
    intent: QueryIntent
    content_type: ContentType
    search_engine: SearchEngineKind


_OFFICIAL = Route(QueryIntent.DOCUMENTATION, ContentType.DOCS, SearchEngineKind.DOCS)
_DOCS_ON_WEB = Route(QueryIntent.DOCUMENTATION, ContentType.DOCS, SearchEngineKind.WEB)
_TUTORIAL = Route(QueryIntent.TUTORIAL, ContentType.ARTICLE, SearchEngineKind.WEB)
_TROUBLESHOOTING = Route(QueryIntent.TROUBLESHOOTING, ContentType.QA, SearchEngineKind.QA)
_GENERAL = Route(QueryIntent.GENERAL, ContentType.ARTICLE, SearchEngineKind.WEB)

ANCHOR_ROUTES: dict[AnchorType, Route] = {
    AnchorType.OFFICIAL_DOCS: _OFFICIAL,
    AnchorType.FALLBACK: _OFFICIAL,
    AnchorType.LIBRARY_API: _OFFICIAL,
    AnchorType.FRAMEWORK_API: _OFFICIAL,
    AnchorType.FRAMEWORK_DOCS: _DOCS_ON_WEB,
    AnchorType.LIBRARY_DOCS: _DOCS_ON_WEB,
    AnchorType.ALGORITHMIC_CONCEPT: _TUTORIAL,
    AnchorType.BEHAVIORAL_CONCEPT: _TUTORIAL,
    AnchorType.CONCEPTUAL: _TUTORIAL,
    AnchorType.TROUBLESHOOTING: _TROUBLESHOOTING,
    AnchorType.CONFIG_SYMBOL: _GENERAL,
    AnchorType.TRIVIAL: _GENERAL,
}

INTENT_ROUTES: dict[QueryIntent, Route] = {
    QueryIntent.DOCUMENTATION: _DOCS_ON_WEB,
    QueryIntent.TUTORIAL: _TUTORIAL,
    QueryIntent.TROUBLESHOOTING: _TROUBLESHOOTING,
    QueryIntent.GENERAL: _GENERAL,
}

# Adding an enum member without a route must fail at import, not route silently
_unrouted = (set(AnchorType) - set(ANCHOR_ROUTES)) | (set(QueryIntent) - set(INTENT_ROUTES))
if _unrouted:
    raise RuntimeError(f"No search route defined for: {sorted(m.value for m in _unrouted)}")


def route_for_anchor(anchor_type: AnchorType) -> Route:
    return ANCHOR_ROUTES[anchor_type]


def route_for_intent(intent: QueryIntent) -> Route:
    return INTENT_ROUTES[intent]


def _query_for_anchor(anchor: Anchor) -> Query:
    route = route_for_anchor(anchor.type)
    return Query(
        primary=anchor.target,
        intent=route.intent,
        weight=anchor.weight,
        source=QuerySource.BASELINE,
        content_type=route.content_type,
        search_engine=route.search_engine,
        reason=f"{anchor.type.value}:{anchor.source}",
    )


def build_baseline_queries(anchors: AnchorSet, max_queries: int = DEFAULT_MAX_QUERIES) -> list[Query]:
    """
    Build one query per anchor, mandatory anchors first.

    Raises:
        BaselineQueryError: the anchor set has no mandatory anchor and was
            not short-circuited.
    """
    if anchors.metadata.short_circuit:
        logger.info("[Baseline] Short-circuited anchor set, no queries built")
        return []

    if not anchors.mandatory:
        raise BaselineQueryError("Baseline query generation failed: no mandatory anchors")

    # A lone generic anchor is too weak a basis for model refinement
    if len(anchors.mandatory) == 1 and not anchors.metadata.has_concrete_symbols:
        anchors.metadata.expansion_disabled = True

    queries: list[Query] = []
    for anchor in anchors.mandatory + anchors.optional:
        if len(queries) >= max_queries:
            break
        queries.append(_query_for_anchor(anchor))

    logger.info(
        f"[Baseline] Generated {len(queries)} guaranteed queries "
        f"(expansion_disabled={anchors.metadata.expansion_disabled})"
    )
    for query in queries:
        logger.debug(f"[Baseline]   [{query.intent.value}->{query.search_engine.value}] {query.primary}")

    return queries
