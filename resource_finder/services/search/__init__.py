"""Search backends and the multi-source retriever."""

from resource_finder.services.search.base import SearchEngine
from resource_finder.services.search.docs_engine import DocsSearchEngine
from resource_finder.services.search.web_engine import WebSearchEngine, classify_url
from resource_finder.services.search.qa_engine import QASearchEngine
from resource_finder.services.search.code_engine import CodeSearchEngine
from resource_finder.services.search.retriever import MultiSourceRetriever, QueryRouting, route_queries

__all__ = [
    "SearchEngine",
    "DocsSearchEngine",
    "WebSearchEngine",
    "classify_url",
    "QASearchEngine",
    "CodeSearchEngine",
    "MultiSourceRetriever",
    "QueryRouting",
    "route_queries",
]
