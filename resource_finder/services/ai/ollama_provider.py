from typing import Optional
import socket
import aiohttp
from resource_finder.services.ai.base import AIProvider
from resource_finder.config import Settings


class OllamaProvider(AIProvider):
    def __init__(self, settings: Settings):
        self.base_url = settings.ollama_base_url
        self.model = settings.ollama_model
        self.timeout = settings.http_timeout_seconds * 4

    @property
    def name(self) -> str:
        return "ollama"

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: float = 1.0,
    ) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "num_predict": max_tokens,
                "temperature": temperature,
            },
        }

        if system_prompt:
            payload["system"] = system_prompt

        timeout = aiohttp.ClientTimeout(total=self.timeout, connect=10)
        connector = aiohttp.TCPConnector(family=socket.AF_INET)
        async with aiohttp.ClientSession(timeout=timeout, connector=connector) as session:
            async with session.post(
                f"{self.base_url}/api/generate",
                json=payload,
            ) as response:
                response.raise_for_status()
                data = await response.json()
                return data.get("response", "")
