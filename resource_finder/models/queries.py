"""Search queries and their routing."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class QueryIntent(str, Enum):
    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    TROUBLESHOOTING = "troubleshooting"
    GENERAL = "general"


class ContentType(str, Enum):
    DOCS = "docs"
    ARTICLE = "article"
    QA = "qa"


class SearchEngineKind(str, Enum):
    """Backend a query is routed to."""

    DOCS = "docs"  # documentation engine
    WEB = "web"  # general web search
    QA = "qa"  # question & answer corpus
    CODE = "code"  # code hosting


class QuerySource(str, Enum):
    BASELINE = "baseline"
    EXPANSION = "expansion"


class Query(BaseModel):
    primary: str
    intent: QueryIntent
    weight: float = Field(ge=0.0, le=1.0)
    source: QuerySource
    content_type: ContentType
    search_engine: SearchEngineKind
    reason: Optional[str] = None
