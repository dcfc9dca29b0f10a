"""Detect code too simple to be worth recommending resources for."""

from resource_finder.models.code_context import CodeContext

TRIVIAL_PREDICATE_COUNT = 4


def trivial_predicates(code_context: CodeContext) -> dict[str, bool]:
    """Evaluate the four independent triviality predicates."""
    ir = code_context.review_ir
    structure = ir.structure

    return {
        "few-lines": structure.lines_of_code < 3,
        "no-structure": (
            structure.functions == 0 and structure.classes == 0 and structure.loops == 0
        ),
        "no-decisions": len(ir.elements.decision_rules) == 0,
        "no-external-libraries": len(code_context.libraries.external_libraries) == 0,
    }


def is_trivial_code(code_context: CodeContext, threshold: int = TRIVIAL_PREDICATE_COUNT) -> bool:
    """
    Trivial only when at least `threshold` predicates hold.

    The default requires all four, so short but real snippets (a two-line
    call into a third-party library, say) are not short-circuited.
    """
    predicates = trivial_predicates(code_context)
    return sum(predicates.values()) >= threshold
