"""Common shape for the independent search backends."""

import socket
from abc import ABC, abstractmethod
from typing import Any, Optional

import aiohttp

from resource_finder.config import Settings
from resource_finder.models.resources import Resource
from resource_finder.services.logging import logger, sanitize_error


class SearchEngine(ABC):
    """
    A single search backend.

    `search()` never raises: every error from `_fetch` is logged and turned
    into an empty result, so a join over several engines cannot fail because
    of one outage.
    """

    name: str = "search"

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def enabled(self) -> bool:
        """False when a required credential is missing."""
        return True

    async def search(self, query: str, **options: Any) -> list[Resource]:
        if not self.enabled:
            logger.debug(f"[Retrieval:{self.name}] Not configured, skipping '{query}'")
            return []
        try:
            resources = await self._fetch(query, **options)
        except Exception as e:
            logger.warning(f"[Retrieval:{self.name}] '{query}' failed: {sanitize_error(e)}")
            return []
        logger.debug(f"[Retrieval:{self.name}] '{query}' -> {len(resources)} results")
        return resources

    @abstractmethod
    async def _fetch(self, query: str, **options: Any) -> list[Resource]:
        pass

    def _session(self) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(total=self.settings.http_timeout_seconds, connect=10)
        connector = aiohttp.TCPConnector(family=socket.AF_INET)
        return aiohttp.ClientSession(
            timeout=timeout,
            connector=connector,
            headers={"User-Agent": self.settings.user_agent},
        )

    async def _get_json(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        async with self._session() as session:
            async with session.get(url, params=params, headers=headers) as response:
                response.raise_for_status()
                return await response.json(content_type=None)

    async def _post_json(
        self,
        url: str,
        payload: dict[str, Any],
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        async with self._session() as session:
            async with session.post(url, json=payload, headers=headers) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
