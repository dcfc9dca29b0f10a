from typing import Optional
from anthropic import AsyncAnthropic
from resource_finder.services.ai.base import AIProvider
from resource_finder.config import Settings


class AnthropicProvider(AIProvider):
    def __init__(self, settings: Settings):
        self.client = AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.http_timeout_seconds * 2,
            max_retries=0,
        )
        self.model = settings.anthropic_model

    @property
    def name(self) -> str:
        return "anthropic"

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: float = 1.0,
    ) -> str:
        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt
        if temperature > 0:
            kwargs["temperature"] = temperature

        response = await self.client.messages.create(**kwargs)
        return response.content[0].text if response.content else ""
