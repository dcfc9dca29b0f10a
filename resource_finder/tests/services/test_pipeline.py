"""Tests for the review context builder and the pipeline orchestrator."""

import pytest

from resource_finder.config import Settings
from resource_finder.models.resources import ResourceResponse, ResourceType, ShortCircuitResponse
from resource_finder.services.pipeline import ResourcePipeline
from resource_finder.services.review_context import build_review_context


class TestReviewContext:
    @pytest.mark.asyncio
    async def test_user_intent_wins(self, make_code_context, valid_review):
        context = await build_review_context(
            make_code_context(), "", "  Learn list comprehensions  ", valid_review
        )
        assert context.learning_goal == "Learn list comprehensions"

    @pytest.mark.asyncio
    async def test_goal_from_review_purpose(self, make_code_context, valid_review):
        context = await build_review_context(make_code_context(), "", None, valid_review)
        assert context.learning_goal == (
            "Understand python code that does the following: "
            "Fetches user records and renders them as a list component."
        )

    @pytest.mark.asyncio
    async def test_hints_and_priority(self, make_code_context, valid_review):
        code_context = make_code_context(
            frameworks=["django"],
            libraries=[{"name": "celery"}, {"name": "os", "isStandardLib": True}],
        )
        context = await build_review_context(code_context, "", None, valid_review)
        assert context.expansion_hints == ["django", "celery"]
        assert context.content_priority["repository"] == 0.65
        assert context.content_priority["documentation"] == 1.0

    @pytest.mark.asyncio
    async def test_empty_review(self, make_code_context, empty_review):
        context = await build_review_context(make_code_context(), "", None, empty_review)
        assert context.learning_goal == "Understand and improve this python code"


class TestResourcePipeline:
    @pytest.fixture
    def react_context(self, make_code_context):
        return make_code_context(language="typescript", frameworks=["react"])

    @pytest.mark.asyncio
    async def test_trivial_code_short_circuits(self, settings, static_retriever, make_code_context, valid_review, resource):
        retriever = static_retriever(docs=[resource("https://docs.example.com")])
        pipeline = ResourcePipeline(settings, retriever=retriever)
        context = make_code_context(lines=1, functions=0, loops=0, decision_rules=0)

        result = await pipeline.run(context, valid_review)

        assert isinstance(result, ShortCircuitResponse)
        assert result.resources == []
        assert result.metadata.short_circuit is True
        assert result.metadata.reason == "trivial-code-path"
        assert retriever.docs_engine.queries == []

    @pytest.mark.asyncio
    async def test_full_run_without_model(self, settings, static_retriever, react_context, valid_review, resource):
        retriever = static_retriever(
            docs=[resource("https://react.dev/reference/react", ResourceType.DOCUMENTATION, 0.95)],
            web=[resource("https://blog.example.com/react-hooks", raw_relevance=0.7)],
        )
        pipeline = ResourcePipeline(settings, retriever=retriever)

        result = await pipeline.run(react_context, valid_review)

        assert isinstance(result, ResourceResponse)
        assert result.success is True
        assert [r.url for r in result.resources] == [
            "https://react.dev/reference/react",
            "https://blog.example.com/react-hooks",
        ]
        assert [r.relevance_score for r in result.resources] == [0.9, 0.85]

        metadata = result.metadata
        assert metadata.total_fetched == 2
        assert metadata.total_returned == 2
        assert metadata.pipeline.baseline_queries == 4
        assert metadata.pipeline.expanded_queries == 0
        assert metadata.pipeline.has_concrete_symbols is True
        assert metadata.pipeline.review_quality == "valid"
        assert metadata.pipeline.ranked_by_model is False
        assert metadata.routing.doc_engine == 1
        assert metadata.routing.general_engine == 3
        assert metadata.routing.code_engine == 3
        assert metadata.queries[0].engine == "docs"
        assert metadata.queries[0].source == "baseline"

    @pytest.mark.asyncio
    async def test_full_run_with_model(self, settings, static_retriever, fake_provider, react_context, valid_review, resource):
        retriever = static_retriever(
            docs=[resource("https://react.dev/reference/react", ResourceType.DOCUMENTATION, 0.95)],
            web=[resource("https://blog.example.com/react-hooks", raw_relevance=0.7)],
        )
        provider = fake_provider([
            '[{"query": "react useEffect dependencies", "intent": "tutorial", "weight": 0.7}]',
            "[0.3, 0.9]",
        ])
        pipeline = ResourcePipeline(settings, ai_provider=provider, retriever=retriever)

        result = await pipeline.run(react_context, valid_review, user_intent="Learn React effects")

        assert [r.url for r in result.resources] == [
            "https://blog.example.com/react-hooks",
            "https://react.dev/reference/react",
        ]
        assert result.metadata.pipeline.expanded_queries == 1
        assert result.metadata.pipeline.ranked_by_model is True
        assert result.metadata.queries[-1].source == "expansion"
        assert "Learn React effects" in provider.calls[1]["system_prompt"]

    @pytest.mark.asyncio
    async def test_all_sources_failing(self, settings, static_retriever, react_context, valid_review):
        boom = RuntimeError("down")
        pipeline = ResourcePipeline(settings, retriever=static_retriever(docs=boom, web=boom, qa=boom, code=boom))

        result = await pipeline.run(react_context, valid_review)

        assert result.success is True
        assert result.resources == []
        assert result.metadata.total_fetched == 0

    @pytest.mark.asyncio
    async def test_invalid_review_still_returns_docs(self, settings, static_retriever, react_context, empty_review, resource):
        retriever = static_retriever(docs=[resource("https://developer.mozilla.org/en-US/docs/Web")])
        pipeline = ResourcePipeline(settings, retriever=retriever)

        result = await pipeline.run(react_context, empty_review)

        assert result.metadata.pipeline.review_quality == "fallback"
        assert result.metadata.pipeline.expansion_disabled is True
        assert retriever.docs_engine.queries == ["typescript official documentation"]
        assert len(result.resources) == 1

    @pytest.mark.asyncio
    async def test_returned_resources_are_capped(self, make_code_context, static_retriever, valid_review, resource):
        settings = Settings(_env_file=None, openai_api_key=None, max_returned_resources=2, prune_max_resources=5)
        retriever = static_retriever(web=[resource(f"https://example.com/{i}") for i in range(8)])
        pipeline = ResourcePipeline(settings, retriever=retriever)

        result = await pipeline.run(make_code_context(frameworks=["flask"]), valid_review)

        assert result.metadata.total_fetched == 8
        assert result.metadata.pipeline.resources_pruned == 3
        assert len(result.resources) == 2
