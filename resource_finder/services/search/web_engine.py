"""General web search backed by Tavily, fetched one call per query intent."""

import asyncio
from typing import Any
from urllib.parse import urlparse

from resource_finder.models.queries import Query
from resource_finder.models.resources import RelevanceScale, Resource, ResourceType
from resource_finder.services.logging import logger
from resource_finder.services.search.base import SearchEngine

DEFAULT_WEB_SCORE = 0.5
MAX_RESULTS_PER_CALL = 10

VIDEO_HOSTS = ("youtube.com", "youtu.be", "vimeo.com")
QA_HOSTS = ("stackoverflow.com", "stackexchange.com")
DOCS_MARKERS = ("docs.", "developer.", "/docs/", "/documentation/")


def classify_url(url: str) -> ResourceType:
    """Guess a result's type from the shape of its URL."""
    lowered = url.lower()
    host = urlparse(lowered).netloc

    if any(h in host for h in VIDEO_HOSTS):
        return ResourceType.VIDEO
    if any(h in host for h in QA_HOSTS):
        return ResourceType.QA
    if any(marker in lowered for marker in DOCS_MARKERS):
        return ResourceType.DOCUMENTATION
    return ResourceType.ARTICLE


def group_by_intent(queries: list[Query]) -> dict[str, list[Query]]:
    groups: dict[str, list[Query]] = {}
    for query in queries:
        groups.setdefault(query.intent.value, []).append(query)
    return groups


class WebSearchEngine(SearchEngine):
    name = "web"

    @property
    def enabled(self) -> bool:
        return bool(self.settings.tavily_api_key)

    async def search_by_intent(self, queries: list[Query]) -> list[Resource]:
        """
        One disjunctive search per intent group.

        Each group is its own call, so a failure in one group only loses
        that group's results.
        """
        groups = group_by_intent(queries)
        per_group = self.settings.web_queries_per_intent

        async def run_group(intent: str, members: list[Query]) -> list[Resource]:
            top = members[:per_group]
            combined = " OR ".join(q.primary for q in top)
            logger.debug(f"[Retrieval:{self.name}:{intent}] Fetching {len(top)} queries")
            results = await self.search(
                combined,
                max_results=min(len(top) * 2, MAX_RESULTS_PER_CALL),
            )
            for resource in results:
                resource.intent = intent
            return results

        batches = await asyncio.gather(
            *(run_group(intent, members) for intent, members in groups.items())
        )
        return [resource for batch in batches for resource in batch]

    async def _fetch(self, query: str, **options: Any) -> list[Resource]:
        data = await self._post_json(
            self.settings.tavily_search_url,
            payload={
                "query": query,
                "search_depth": self.settings.tavily_search_depth,
                "max_results": options.get("max_results", MAX_RESULTS_PER_CALL),
            },
            headers={"Authorization": f"Bearer {self.settings.tavily_api_key}"},
        )

        resources = []
        for result in data.get("results") or []:
            url = result.get("url")
            if not url:
                continue
            score = result.get("score")
            if not isinstance(score, (int, float)):
                score = DEFAULT_WEB_SCORE
            resources.append(Resource(
                type=classify_url(url),
                title=result.get("title") or url,
                url=url,
                description=(result.get("content") or "")[:200],
                metadata={
                    "source": urlparse(url).netloc,
                    "score": score,
                    "relevanceScale": RelevanceScale.ENGINE_SCORE.value,
                },
                raw_relevance=float(score),
            ))
        return resources
