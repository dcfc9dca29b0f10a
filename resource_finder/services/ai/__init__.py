from typing import Optional

from resource_finder.services.ai.base import AIProvider
from resource_finder.services.ai.openai_provider import OpenAIProvider
from resource_finder.services.ai.anthropic_provider import AnthropicProvider
from resource_finder.services.ai.ollama_provider import OllamaProvider
from resource_finder.services.ai.json_response import MalformedCompletionError, parse_json_array
from resource_finder.config import Settings


def get_ai_provider(settings: Settings) -> AIProvider:
    provider_name = settings.ai_provider.lower()

    if provider_name == "openai":
        if not settings.openai_api_key:
            raise ValueError("OpenAI-compatible API key not configured")
        return OpenAIProvider(settings)
    elif provider_name == "anthropic":
        if not settings.anthropic_api_key:
            raise ValueError("Anthropic API key not configured")
        return AnthropicProvider(settings)
    elif provider_name == "ollama":
        return OllamaProvider(settings)
    else:
        raise ValueError(f"Unknown AI provider: {provider_name}")


def get_optional_ai_provider(settings: Settings) -> Optional[AIProvider]:
    """Provider for best-effort stages; None when no credential is configured."""
    if not settings.llm_configured:
        return None
    return get_ai_provider(settings)


__all__ = [
    "AIProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "OllamaProvider",
    "MalformedCompletionError",
    "parse_json_array",
    "get_ai_provider",
    "get_optional_ai_provider",
]
