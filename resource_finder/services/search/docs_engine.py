"""Documentation engine backed by the MDN search API."""

from typing import Any

from resource_finder.models.resources import RelevanceScale, Resource, ResourceType
from resource_finder.services.search.base import SearchEngine

# Official docs are authoritative, so every hit gets the same high prior
DOCUMENTATION_PRIOR = 0.95


class DocsSearchEngine(SearchEngine):
    name = "docs"

    async def _fetch(self, query: str, **options: Any) -> list[Resource]:
        # The whole query is sent as one phrase; top hits only
        data = await self._get_json(
            self.settings.mdn_search_url,
            params={"q": query, "locale": "en-US"},
        )

        resources = []
        for doc in (data.get("documents") or [])[: self.settings.docs_engine_top_hits]:
            mdn_url = doc.get("mdn_url")
            if not mdn_url:
                continue
            resources.append(Resource(
                type=ResourceType.DOCUMENTATION,
                title=doc.get("title") or mdn_url,
                url=f"{self.settings.mdn_base_url}{mdn_url}",
                description=doc.get("summary") or "Official documentation",
                metadata={
                    "source": "mdn",
                    "popularity": doc.get("popularity", 0),
                    "relevanceScale": RelevanceScale.SOURCE_PRIOR.value,
                },
                raw_relevance=DOCUMENTATION_PRIOR,
            ))
        return resources
