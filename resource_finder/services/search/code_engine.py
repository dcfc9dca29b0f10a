"""Code-hosting engine backed by GitHub repository search."""

from typing import Any

from resource_finder.models.resources import RelevanceScale, Resource, ResourceType
from resource_finder.services.search.base import SearchEngine


class CodeSearchEngine(SearchEngine):
    name = "code"

    @property
    def enabled(self) -> bool:
        return bool(self.settings.github_token)

    async def _fetch(self, query: str, **options: Any) -> list[Resource]:
        data = await self._get_json(
            f"{self.settings.github_api_url}/search/repositories",
            params={
                "q": query,
                "sort": "stars",
                "order": "desc",
                "per_page": self.settings.code_page_size,
            },
            headers={
                "Authorization": f"token {self.settings.github_token}",
                "Accept": "application/vnd.github.v3+json",
            },
        )

        resources = []
        for repo in data.get("items") or []:
            url = repo.get("html_url")
            if not url:
                continue
            resources.append(Resource(
                type=ResourceType.REPOSITORY,
                title=repo.get("full_name") or url,
                url=url,
                description=repo.get("description") or "No description available",
                metadata={
                    "source": "github",
                    "stars": repo.get("stargazers_count", 0),
                    "language": repo.get("language"),
                    "relevanceScale": RelevanceScale.NONE.value,
                },
            ))
        return resources
