"""Tests for best-effort query expansion."""

import json

import pytest

from resource_finder.models.queries import QueryIntent, QuerySource, SearchEngineKind
from resource_finder.models.review import ResourceReviewContext
from resource_finder.services.anchors import AnchorExtractor
from resource_finder.services.queries import QueryExpander, build_baseline_queries


@pytest.fixture
def review_context():
    return ResourceReviewContext(
        learning_goal="Understand React data fetching",
        content_priority={"documentation": 1.0},
        expansion_hints=["react"],
    )


@pytest.fixture
def react_anchors(settings, make_code_context, valid_review):
    context = make_code_context(language="typescript", frameworks=["react"])
    return AnchorExtractor(settings).extract(context, valid_review)


@pytest.fixture
def baseline(react_anchors):
    return build_baseline_queries(react_anchors)


class TestExpansionSkipped:
    """Cases where the baseline is returned untouched."""

    @pytest.mark.asyncio
    async def test_disabled_even_with_provider(self, settings, fake_provider, baseline, react_anchors, review_context):
        provider = fake_provider("[]")
        react_anchors.metadata.expansion_disabled = True

        result = await QueryExpander(settings, provider).expand(baseline, review_context, react_anchors)

        assert result == baseline
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_no_provider(self, settings, baseline, react_anchors, review_context):
        result = await QueryExpander(settings, None).expand(baseline, review_context, react_anchors)
        assert result == baseline

    @pytest.mark.asyncio
    async def test_no_concrete_symbols(self, settings, fake_provider, make_code_context, valid_review, review_context):
        context = make_code_context(execution_model="asynchronous")
        anchors = AnchorExtractor(settings).extract(context, valid_review)
        baseline = build_baseline_queries(anchors)
        provider = fake_provider("[]")

        result = await QueryExpander(settings, provider).expand(baseline, review_context, anchors)

        assert result == baseline
        assert provider.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("completion", [
        "Sure! Here are some queries: react hooks",
        '{"query": "react hooks"}',
        '[{"query": "react hooks"',
        '["react hooks"]',
        "",
    ])
    async def test_malformed_completion(self, settings, fake_provider, baseline, react_anchors, review_context, completion):
        result = await QueryExpander(settings, fake_provider(completion)).expand(
            baseline, review_context, react_anchors
        )
        assert result == baseline

    @pytest.mark.asyncio
    async def test_provider_error(self, settings, fake_provider, baseline, react_anchors, review_context):
        provider = fake_provider(TimeoutError("model timed out"))
        result = await QueryExpander(settings, provider).expand(baseline, review_context, react_anchors)
        assert result == baseline


class TestExpansionApplied:
    """Cases where refinement queries are appended."""

    @pytest.mark.asyncio
    async def test_valid_expansion(self, settings, fake_provider, baseline, react_anchors, review_context):
        completion = json.dumps([
            {"query": "react useEffect cleanup", "intent": "tutorial", "weight": 0.95},
            {"query": "react suspense", "intent": "documentation", "weight": 0.1},
        ])
        provider = fake_provider(f"<think>planning</think>\n```json\n{completion}\n```")

        result = await QueryExpander(settings, provider).expand(baseline, review_context, react_anchors)

        assert result[: len(baseline)] == baseline
        added = result[len(baseline):]
        assert [q.primary for q in added] == ["react useEffect cleanup", "react suspense"]
        assert added[0].weight == 0.8
        assert added[1].weight == 0.6
        assert added[0].intent == QueryIntent.TUTORIAL
        assert added[0].search_engine == SearchEngineKind.WEB
        assert all(q.source == QuerySource.EXPANSION for q in added)
        assert all(q.reason == "llm-refinement" for q in added)

    @pytest.mark.asyncio
    async def test_prompt_names_symbols_and_goal(self, settings, fake_provider, baseline, react_anchors, review_context):
        provider = fake_provider("[]")
        await QueryExpander(settings, provider).expand(baseline, review_context, react_anchors)

        call = provider.calls[0]
        assert "react" in call["system_prompt"]
        assert "Understand React data fetching" in call["system_prompt"]
        assert "react typescript documentation" in call["prompt"]
        assert call["temperature"] == settings.expansion_temperature

    @pytest.mark.asyncio
    async def test_out_of_scope_and_duplicates_dropped(self, settings, fake_provider, baseline, react_anchors, review_context):
        completion = json.dumps([
            {"query": "vue composition api", "intent": "documentation"},
            {"query": "react typescript documentation", "intent": "documentation"},
            {"query": "react context api", "intent": "not-an-intent"},
        ])
        result = await QueryExpander(settings, fake_provider(completion)).expand(
            baseline, review_context, react_anchors
        )

        added = result[len(baseline):]
        assert [q.primary for q in added] == ["react context api"]
        assert added[0].intent == QueryIntent.GENERAL
        assert added[0].weight == 0.7

    @pytest.mark.asyncio
    async def test_expansion_is_capped(self, settings, fake_provider, baseline, react_anchors, review_context):
        completion = json.dumps([{"query": f"react topic {i}"} for i in range(6)])
        result = await QueryExpander(settings, fake_provider(completion)).expand(
            baseline, review_context, react_anchors
        )
        assert len(result) == len(baseline) + 3
