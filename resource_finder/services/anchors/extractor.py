"""Turn analyzer output and review text into a prioritized anchor set."""

import re
from typing import Optional

from resource_finder.config import Settings
from resource_finder.models.anchors import Anchor, AnchorMetadata, AnchorSet, AnchorType
from resource_finder.models.code_context import CodeContext
from resource_finder.models.review import ReviewQualityStatus, ReviewResponse
from resource_finder.services.anchors.quality import validate_review_quality
from resource_finder.services.anchors.trivial import is_trivial_code
from resource_finder.services.logging import logger


# Technical terms looked for in review prose, in priority order
TECHNICAL_VOCABULARY = [
    "recursion",
    "iteration",
    "memoization",
    "dynamic programming",
    "async",
    "promise",
    "callback",
    "closure",
    "generator",
    "prototype",
    "inheritance",
    "polymorphism",
    "concurrency",
    "parallelism",
    "mutex",
    "semaphore",
    "deadlock",
    "race condition",
    "immutability",
    "pure function",
    "side effect",
]

# Magic-value roles that carry no retrievable meaning
UNINFORMATIVE_ROLES = {"", "unknown", "literal"}

# Error-handling approaches that count as absent
ABSENT_ERROR_HANDLING = {"", "none", "silent"}

ASYNC_EXECUTION_MODELS = {"asynchronous", "async"}


# Whole words only, plural forms allowed ("closures", "mutexes")
_TERM_PATTERNS = [
    (term, re.compile(rf"\b{re.escape(term)}(?:es|s)?\b"))
    for term in TECHNICAL_VOCABULARY
]


def find_technical_terms(text: str) -> list[str]:
    """Vocabulary terms mentioned in text, deduplicated, vocabulary order."""
    lowered = (text or "").lower()
    return [term for term, pattern in _TERM_PATTERNS if pattern.search(lowered)]


class AnchorExtractor:
    """Builds AnchorSets from a CodeContext and the upstream review."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def extract(self, code_context: CodeContext, review: ReviewResponse) -> AnchorSet:
        language = code_context.language_name
        quality = validate_review_quality(review)

        if is_trivial_code(code_context, threshold=self.settings.trivial_predicate_threshold):
            logger.info(f"[Anchors] Trivial {language} code, short-circuiting")
            return self._trivial_anchors(language, quality.status.value, quality.reasons)

        if quality.status == ReviewQualityStatus.INVALID:
            logger.warning(f"[Anchors] Invalid review, using minimal anchors: {quality.reasons}")
            anchors = self._minimal_anchors(language)
            anchors.metadata.review_quality_reasons = quality.reasons
            return anchors

        concrete = self._concrete_symbols(code_context)

        mandatory = list(concrete)
        if not concrete:
            mandatory.append(self._official_docs_anchor(language, source="no-concrete-symbols"))

        for framework in code_context.libraries.frameworks:
            mandatory.append(Anchor(
                type=AnchorType.FRAMEWORK_DOCS,
                symbol=framework.name,
                target=f"{framework.name} {language} documentation",
                source="framework-detection",
                weight=0.95,
            ))

        if code_context.execution_model.lower() in ASYNC_EXECUTION_MODELS:
            mandatory.append(Anchor(
                type=AnchorType.CONCEPTUAL,
                symbol="asynchronous programming",
                target=f"{language} asynchronous programming guide",
                source="execution-model",
                weight=0.9,
            ))

        optional = self._review_concepts(review, language)
        error_anchor = self._error_handling_anchor(code_context, language)
        if error_anchor is not None:
            optional.append(error_anchor)
        # Optional anchors only fill remaining query budget, so best first
        optional.sort(key=lambda a: a.weight, reverse=True)

        anchors = AnchorSet(
            mandatory=mandatory,
            optional=optional,
            metadata=AnchorMetadata(
                has_concrete_symbols=len(concrete) > 0,
                concrete_symbol_count=len(concrete),
                review_quality=quality.status.value,
                review_quality_reasons=quality.reasons,
                language=language,
            ),
        )

        logger.info(
            f"[Anchors] mandatory={len(mandatory)} optional={len(optional)} "
            f"concrete={len(concrete)} quality={quality.status.value}"
        )
        return anchors

    def _concrete_symbols(self, code_context: CodeContext) -> list[Anchor]:
        """Library, framework and configuration anchors taken straight from the analyzer."""
        language = code_context.language_name
        symbols: list[Anchor] = []

        seen_libraries = set()
        for library in code_context.libraries.external_libraries:
            if len(seen_libraries) >= self.settings.max_library_anchors:
                break
            if library.name in seen_libraries:
                continue
            seen_libraries.add(library.name)
            symbols.append(Anchor(
                type=AnchorType.LIBRARY_API,
                symbol=library.name,
                target=f"{language} {library.name} API",
                source="import-analysis",
                weight=0.95,
            ))

        for framework in code_context.libraries.frameworks:
            symbols.append(Anchor(
                type=AnchorType.FRAMEWORK_API,
                symbol=framework.name,
                target=f"{language} {framework.name}",
                source="framework-detection",
                weight=1.0,
            ))

        seen_roles = set()
        for magic_value in code_context.review_ir.elements.magic_values:
            if len(seen_roles) >= self.settings.max_config_anchors:
                break
            role = (magic_value.role or "").strip()
            if role.lower() in UNINFORMATIVE_ROLES or role in seen_roles:
                continue
            seen_roles.add(role)
            symbols.append(Anchor(
                type=AnchorType.CONFIG_SYMBOL,
                symbol=role,
                target=f"{language} {role}",
                source="magic-value-analysis",
                weight=0.7,
            ))

        return symbols

    def _review_concepts(self, review: ReviewResponse, language: str) -> list[Anchor]:
        """Conceptual anchors from the complexity and behavioral review text."""
        concepts: list[Anchor] = []
        seen = set()

        passes = [
            (review.complexity, AnchorType.ALGORITHMIC_CONCEPT, "review-complexity", 0.6),
            (review.behavioral, AnchorType.BEHAVIORAL_CONCEPT, "review-behavioral", 0.65),
        ]
        for text, anchor_type, source, weight in passes:
            for term in find_technical_terms(text):
                if term in seen:
                    continue
                seen.add(term)
                concepts.append(Anchor(
                    type=anchor_type,
                    symbol=term,
                    target=f"{language} {term}",
                    source=source,
                    weight=weight,
                    retrieval_ready=False,
                ))

        return concepts[: self.settings.max_conceptual_anchors]

    def _error_handling_anchor(self, code_context: CodeContext, language: str) -> Optional[Anchor]:
        approach = (code_context.error_handling or "").lower()
        swallowed = any(
            behavior.type == "empty-catch"
            for behavior in code_context.review_ir.elements.silent_behaviors
        )
        if approach not in ABSENT_ERROR_HANDLING and not swallowed:
            return None

        return Anchor(
            type=AnchorType.TROUBLESHOOTING,
            symbol="error handling",
            target=f"{language} error handling best practices",
            source="error-handling-gap",
            weight=0.75,
        )

    def _official_docs_anchor(self, language: str, source: str) -> Anchor:
        return Anchor(
            type=AnchorType.OFFICIAL_DOCS,
            symbol=language,
            target=f"{language} official documentation",
            source=source,
            weight=1.0,
        )

    def _minimal_anchors(self, language: str) -> AnchorSet:
        """One guaranteed documentation target when the review cannot be trusted."""
        fallback = Anchor(
            type=AnchorType.FALLBACK,
            symbol=language,
            target=f"{language} official documentation",
            source="minimal-fallback",
            weight=1.0,
        )
        return AnchorSet(
            mandatory=[fallback],
            optional=[],
            metadata=AnchorMetadata(
                has_concrete_symbols=False,
                review_quality="fallback",
                reason="degraded-review-quality",
                language=language,
            ),
        )

    def _trivial_anchors(self, language: str, quality: str, reasons: list[str]) -> AnchorSet:
        return AnchorSet(
            mandatory=[Anchor(
                type=AnchorType.TRIVIAL,
                symbol=f"{language} basics",
                target=f"{language} basics",
                source="short-circuit",
                weight=1.0,
            )],
            optional=[],
            metadata=AnchorMetadata(
                review_quality=quality,
                review_quality_reasons=reasons,
                short_circuit=True,
                reason="trivial-code-path",
                language=language,
            ),
        )


def extract_anchors(
    code_context: CodeContext,
    review: ReviewResponse,
    settings: Settings,
) -> AnchorSet:
    return AnchorExtractor(settings).extract(code_context, review)
