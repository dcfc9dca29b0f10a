"""Concurrent fan-out of queries to the search backends."""

import asyncio
from typing import Optional

from pydantic import BaseModel, Field

from resource_finder.config import Settings
from resource_finder.models.queries import Query, SearchEngineKind
from resource_finder.models.resources import Resource
from resource_finder.services.logging import logger
from resource_finder.services.search.base import SearchEngine
from resource_finder.services.search.code_engine import CodeSearchEngine
from resource_finder.services.search.docs_engine import DocsSearchEngine
from resource_finder.services.search.qa_engine import QASearchEngine
from resource_finder.services.search.web_engine import WebSearchEngine


class QueryRouting(BaseModel):
    """Queries assigned to each backend, before per-engine fan-out limits."""

    docs: list[Query] = Field(default_factory=list)
    web: list[Query] = Field(default_factory=list)
    qa: list[Query] = Field(default_factory=list)
    code: list[Query] = Field(default_factory=list)


def route_queries(queries: list[Query], code_queries: int) -> QueryRouting:
    routing = QueryRouting()
    for query in queries:
        if query.search_engine == SearchEngineKind.DOCS:
            routing.docs.append(query)
        elif query.search_engine == SearchEngineKind.WEB:
            routing.web.append(query)
        elif query.search_engine == SearchEngineKind.QA:
            routing.qa.append(query)
        elif query.search_engine == SearchEngineKind.CODE:
            routing.code.append(query)
    # Code hosting also sees the highest-priority queries, whatever their route
    for query in queries[:code_queries]:
        if query not in routing.code:
            routing.code.append(query)
    return routing


class MultiSourceRetriever:
    """Runs every routed search concurrently and joins the results."""

    def __init__(
        self,
        settings: Settings,
        docs_engine: Optional[SearchEngine] = None,
        web_engine: Optional[WebSearchEngine] = None,
        qa_engine: Optional[SearchEngine] = None,
        code_engine: Optional[SearchEngine] = None,
    ):
        self.settings = settings
        self.docs_engine = docs_engine or DocsSearchEngine(settings)
        self.web_engine = web_engine or WebSearchEngine(settings)
        self.qa_engine = qa_engine or QASearchEngine(settings)
        self.code_engine = code_engine or CodeSearchEngine(settings)

    async def retrieve(self, queries: list[Query]) -> tuple[list[Resource], QueryRouting]:
        """
        Fetch resources for all queries.

        Returns the concatenated results in routing order (docs, web, qa,
        code; query order within each) together with the routing used.
        """
        routing = route_queries(queries, self.settings.code_engine_max_queries)
        settings = self.settings
        tasks = []

        if routing.docs:
            logger.info(f"[Retrieval] Routing {len(routing.docs)} queries to docs engine")
            for query in routing.docs[: settings.docs_engine_max_queries]:
                tasks.append(self.docs_engine.search(query.primary))

        if routing.web:
            logger.info(f"[Retrieval] Routing {len(routing.web)} queries to web engine")
            tasks.append(self.web_engine.search_by_intent(routing.web[: settings.web_engine_max_queries]))

        if routing.qa:
            logger.info(f"[Retrieval] Routing {len(routing.qa)} queries to Q&A engine")
            for query in routing.qa[: settings.qa_engine_max_queries]:
                tasks.append(self.qa_engine.search(query.primary))

        for query in routing.code:
            tasks.append(self.code_engine.search(query.primary))

        batches = await asyncio.gather(*tasks)
        resources = [resource for batch in batches for resource in batch]

        logger.info(f"[Retrieval] {len(tasks)} fetches returned {len(resources)} resources")
        return resources, routing
