"""Anchors: retrieval targets derived from code analysis."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AnchorType(str, Enum):
    """Kind of retrieval target."""

    # Concrete, detected in the code
    LIBRARY_API = "library-api"
    FRAMEWORK_API = "framework-api"
    CONFIG_SYMBOL = "config-symbol"

    # Documentation targets
    OFFICIAL_DOCS = "official-docs"
    FRAMEWORK_DOCS = "framework-docs"
    LIBRARY_DOCS = "library-docs"

    # Conceptual, detected in review prose
    ALGORITHMIC_CONCEPT = "algorithmic-concept"
    BEHAVIORAL_CONCEPT = "behavioral-concept"
    CONCEPTUAL = "conceptual"
    TROUBLESHOOTING = "troubleshooting"

    # Degenerate
    TRIVIAL = "trivial"
    FALLBACK = "fallback"


class Anchor(BaseModel):
    type: AnchorType
    symbol: str  # the detected name or topic, e.g. "react", "memoization"
    target: str  # search phrase built from the symbol
    source: str  # which extraction step produced it
    weight: float = Field(ge=0.0, le=1.0)
    retrieval_ready: bool = True


class AnchorMetadata(BaseModel):
    has_concrete_symbols: bool = False
    concrete_symbol_count: int = 0
    review_quality: str = "unknown"  # valid, degraded, fallback, unknown
    review_quality_reasons: list[str] = Field(default_factory=list)
    short_circuit: bool = False
    reason: Optional[str] = None
    expansion_disabled: bool = False
    language: str = "unknown"


class AnchorSet(BaseModel):
    mandatory: list[Anchor] = Field(default_factory=list)
    optional: list[Anchor] = Field(default_factory=list)
    metadata: AnchorMetadata = Field(default_factory=AnchorMetadata)

    @property
    def total(self) -> int:
        return len(self.mandatory) + len(self.optional)

    @property
    def concrete_symbols(self) -> list[str]:
        """Names of the concrete anchors, used to scope query expansion."""
        concrete = (AnchorType.LIBRARY_API, AnchorType.FRAMEWORK_API, AnchorType.CONFIG_SYMBOL)
        seen: dict[str, None] = {}
        for anchor in self.mandatory + self.optional:
            if anchor.type in concrete:
                seen.setdefault(anchor.symbol, None)
        return list(seen)
