"""Q&A engine backed by the Stack Exchange search API."""

import html
import re
from typing import Any

from resource_finder.models.resources import RelevanceScale, Resource, ResourceType
from resource_finder.services.search.base import SearchEngine

_TAGS = re.compile(r"<[^>]+>")


def _plain_text(body: str, limit: int = 200) -> str:
    text = html.unescape(_TAGS.sub(" ", body or ""))
    return " ".join(text.split())[:limit]


class QASearchEngine(SearchEngine):
    name = "qa"

    async def _fetch(self, query: str, **options: Any) -> list[Resource]:
        params = {
            "order": "desc",
            "sort": "relevance",
            "q": query,
            "site": self.settings.stackexchange_site,
            "pagesize": self.settings.qa_page_size,
            "filter": "withbody",
        }
        if self.settings.stackexchange_key:
            params["key"] = self.settings.stackexchange_key

        data = await self._get_json(f"{self.settings.stackexchange_api_url}/search/advanced", params=params)

        resources = []
        for item in data.get("items") or []:
            link = item.get("link")
            if not link:
                continue
            resources.append(Resource(
                type=ResourceType.QA,
                title=html.unescape(item.get("title") or link),
                url=link,
                description=_plain_text(item.get("body", "")) or "No description available",
                metadata={
                    "source": self.settings.stackexchange_site,
                    "votes": item.get("score", 0),
                    "answers": item.get("answer_count", 0),
                    "views": item.get("view_count", 0),
                    "answered": item.get("is_answered", False),
                    "relevanceScale": RelevanceScale.NONE.value,
                },
            ))
        return resources
