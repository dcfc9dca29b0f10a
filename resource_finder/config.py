from pydantic_settings import BaseSettings
from typing import Literal, Optional
from functools import lru_cache


class Settings(BaseSettings):
    # AI Provider Configuration
    ai_provider: Literal["openai", "anthropic", "ollama"] = "openai"

    # OpenAI-compatible chat completions (Groq by default)
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.groq.com/openai/v1"
    openai_model: str = "qwen/qwen3-32b"

    # Anthropic
    anthropic_api_key: Optional[str] = None
    anthropic_model: str = "claude-3-5-haiku-latest"

    # Ollama
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "qwen3:8b"

    # Query expansion
    expansion_temperature: float = 0.3
    expansion_max_tokens: int = 500
    max_expansion_queries: int = 3

    # Ranking
    ranking_temperature: float = 0.1
    ranking_max_tokens: int = 300

    # Search backends
    tavily_api_key: Optional[str] = None
    tavily_search_url: str = "https://api.tavily.com/search"
    tavily_search_depth: Literal["basic", "advanced"] = "advanced"

    mdn_search_url: str = "https://developer.mozilla.org/api/v1/search"
    mdn_base_url: str = "https://developer.mozilla.org"

    stackexchange_api_url: str = "https://api.stackexchange.com/2.3"
    stackexchange_site: str = "stackoverflow"
    stackexchange_key: Optional[str] = None

    github_api_url: str = "https://api.github.com"
    github_token: Optional[str] = None

    http_timeout_seconds: float = 15.0
    user_agent: str = "resource-finder/0.1"

    # Anchor extraction
    max_library_anchors: int = 8
    max_config_anchors: int = 5
    max_conceptual_anchors: int = 5
    trivial_predicate_threshold: int = 4  # of the four trivial-code predicates

    # Query synthesis
    max_queries: int = 15

    # Retrieval fan-out
    docs_engine_max_queries: int = 3
    docs_engine_top_hits: int = 3
    web_engine_max_queries: int = 10
    web_queries_per_intent: int = 3
    qa_engine_max_queries: int = 3
    qa_page_size: int = 5
    code_engine_max_queries: int = 3
    code_page_size: int = 5

    # Pruning / response
    prune_max_resources: int = 15  # bounds the ranking payload
    max_returned_resources: int = 25

    # CORS Configuration
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def llm_configured(self) -> bool:
        """Whether the selected generative-model provider can be called."""
        if self.ai_provider == "openai":
            return bool(self.openai_api_key)
        if self.ai_provider == "anthropic":
            return bool(self.anthropic_api_key)
        return True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
