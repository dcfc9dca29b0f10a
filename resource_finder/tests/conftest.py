"""Shared builders and fakes for the resource pipeline tests."""

from typing import Optional, Union

import pytest

from resource_finder.config import Settings
from resource_finder.models.code_context import CodeContext
from resource_finder.models.resources import Resource, ResourceType
from resource_finder.models.review import ReviewResponse
from resource_finder.services.ai import AIProvider
from resource_finder.services.search import MultiSourceRetriever, SearchEngine, WebSearchEngine


class FakeAIProvider(AIProvider):
    """Returns canned completions in order, or raises a given exception."""

    def __init__(self, responses: Union[str, list[str], Exception]):
        if isinstance(responses, str):
            responses = [responses]
        self.responses = responses
        self.calls: list[dict] = []

    @property
    def name(self) -> str:
        return "fake"

    async def complete(self, prompt, system_prompt=None, max_tokens=1024, temperature=1.0) -> str:
        self.calls.append({
            "prompt": prompt,
            "system_prompt": system_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if isinstance(self.responses, Exception):
            raise self.responses
        return self.responses[min(len(self.calls), len(self.responses)) - 1]


class StaticEngine(SearchEngine):
    """Serves fixed results per query; raises for queries mapped to an exception."""

    name = "static"

    def __init__(self, settings: Settings, results: Optional[dict] = None, default=None):
        super().__init__(settings)
        self.results = results or {}
        self.default = default if default is not None else []
        self.queries: list[str] = []

    async def _fetch(self, query, **options):
        self.queries.append(query)
        outcome = self.results.get(query, self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return [r.model_copy() for r in outcome]


class StaticWebEngine(WebSearchEngine):
    name = "web"

    def __init__(self, settings: Settings, default=None):
        super().__init__(settings)
        self.default = default if default is not None else []
        self.queries: list[str] = []
        self.options: list[dict] = []

    @property
    def enabled(self) -> bool:
        return True

    async def _fetch(self, query, **options):
        self.queries.append(query)
        self.options.append(options)
        if isinstance(self.default, Exception):
            raise self.default
        return [r.model_copy() for r in self.default]


def make_resource(
    url: str,
    type: ResourceType = ResourceType.ARTICLE,
    raw_relevance: Optional[float] = None,
    title: Optional[str] = None,
) -> Resource:
    return Resource(
        type=type,
        title=title or url.rsplit("/", 1)[-1],
        url=url,
        description=f"About {url}",
        raw_relevance=raw_relevance,
    )


@pytest.fixture
def settings():
    """Settings with no credentials so nothing reaches the network."""
    return Settings(
        _env_file=None,
        ai_provider="openai",
        openai_api_key=None,
        anthropic_api_key=None,
        tavily_api_key=None,
        github_token=None,
        stackexchange_key=None,
    )


@pytest.fixture
def make_code_context():
    def _make(
        language: str = "python",
        libraries: Optional[list] = None,
        frameworks: Optional[list] = None,
        lines: int = 40,
        functions: int = 3,
        classes: int = 0,
        loops: int = 1,
        decision_rules: int = 2,
        magic_roles: Optional[list] = None,
        execution_model: str = "synchronous",
        error_handling: str = "exceptions",
        silent_behaviors: Optional[list] = None,
    ) -> CodeContext:
        return CodeContext.model_validate({
            "language": {"language": language, "confidence": 0.95},
            "libraries": {
                "libraries": libraries or [],
                "frameworks": [{"name": name, "confidence": 0.9} for name in (frameworks or [])],
            },
            "paradigm": {"primary": {"paradigm": "functional", "score": 0.7}},
            "reviewIR": {
                "language": language,
                "structure": {
                    "linesOfCode": lines,
                    "functions": functions,
                    "classes": classes,
                    "loops": loops,
                },
                "behavior": {"executionModel": execution_model, "isDeterministic": True},
                "quality": {"errorHandling": error_handling},
                "elements": {
                    "decisionRules": [
                        {"condition": f"x > {i}", "outcome": "branch", "location": i}
                        for i in range(decision_rules)
                    ],
                    "magicValues": [
                        {"value": 3000 + i, "role": role, "location": i}
                        for i, role in enumerate(magic_roles or [])
                    ],
                    "silentBehaviors": [
                        {"type": kind, "risk": "medium", "location": 1}
                        for kind in (silent_behaviors or [])
                    ],
                },
            },
        })

    return _make


@pytest.fixture
def valid_review():
    return ReviewResponse.model_validate({
        "complexity": "Runs in O(n) time using iteration over the input list.",
        "purpose": "Fetches user records and renders them as a list component.",
        "behavioral": "State updates are batched; the effect hook has a side effect on mount.",
        "risks": "Network failures are not retried.",
        "edgeCases": "An empty user list renders a placeholder.",
        "summary": "A small data-fetching component with a single effect.",
    })


@pytest.fixture
def empty_review():
    return ReviewResponse.model_validate({
        "complexity": "",
        "purpose": "",
        "behavioral": "",
        "risks": "",
        "edgeCases": "",
        "summary": "",
    })


@pytest.fixture
def static_retriever(settings):
    """Retriever whose four engines serve the given results."""

    def _make(docs=None, web=None, qa=None, code=None) -> MultiSourceRetriever:
        return MultiSourceRetriever(
            settings,
            docs_engine=StaticEngine(settings, default=docs),
            web_engine=StaticWebEngine(settings, default=web),
            qa_engine=StaticEngine(settings, default=qa),
            code_engine=StaticEngine(settings, default=code),
        )

    return _make


@pytest.fixture
def fake_provider():
    """Factory for providers answering with canned completions."""
    return FakeAIProvider


@pytest.fixture
def static_engine(settings):
    def _make(results=None, default=None) -> StaticEngine:
        return StaticEngine(settings, results=results, default=default)

    return _make


@pytest.fixture
def resource():
    """Factory for bare resources."""
    return make_resource


@pytest.fixture
def static_web_engine(settings):
    def _make(default=None) -> StaticWebEngine:
        return StaticWebEngine(settings, default=default)

    return _make
