from typing import Optional
from openai import AsyncOpenAI
from resource_finder.services.ai.base import AIProvider
from resource_finder.config import Settings


class OpenAIProvider(AIProvider):
    """Chat completions against any OpenAI-compatible endpoint (Groq, OpenAI, vLLM...)."""

    def __init__(self, settings: Settings):
        self.client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout=settings.http_timeout_seconds * 2,
            max_retries=0,
        )
        self.model = settings.openai_model

    @property
    def name(self) -> str:
        return "openai"

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: float = 1.0,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return response.choices[0].message.content or ""
