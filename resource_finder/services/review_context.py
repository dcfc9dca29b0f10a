"""Default builder for the learning context that steers expansion and ranking."""

from typing import Awaitable, Callable, Optional

from resource_finder.models.code_context import CodeContext
from resource_finder.models.review import ResourceReviewContext, ReviewResponse

ReviewContextBuilder = Callable[
    [CodeContext, str, Optional[str], ReviewResponse],
    Awaitable[ResourceReviewContext],
]

DEFAULT_CONTENT_PRIORITY = {
    "documentation": 1.0,
    "article": 0.8,
    "qa": 0.7,
    "video": 0.6,
    "repository": 0.5,
}

MAX_GOAL_CHARS = 300


def _first_sentence(text: str) -> str:
    text = " ".join((text or "").split())
    for end in (". ", "! ", "? "):
        if end in text:
            text = text.split(end, 1)[0] + end.strip()
            break
    return text[:MAX_GOAL_CHARS]


async def build_review_context(
    code_context: CodeContext,
    source_code: str,
    user_intent: Optional[str],
    review: ReviewResponse,
) -> ResourceReviewContext:
    """
    Derive a learning goal, content priorities and expansion hints.

    An explicit user intent wins; otherwise the review's purpose or summary
    supplies the goal.
    """
    language = code_context.language_name

    if user_intent and user_intent.strip():
        goal = user_intent.strip()[:MAX_GOAL_CHARS]
    else:
        described = _first_sentence(review.purpose) or _first_sentence(review.summary)
        goal = (
            f"Understand {language} code that does the following: {described}"
            if described
            else f"Understand and improve this {language} code"
        )

    hints = [fw.name for fw in code_context.libraries.frameworks]
    hints += [lib.name for lib in code_context.libraries.external_libraries if lib.name not in hints]

    priority = dict(DEFAULT_CONTENT_PRIORITY)
    if code_context.libraries.frameworks:
        # Framework code benefits most from its official docs and examples
        priority["repository"] = 0.65

    return ResourceReviewContext(
        learning_goal=goal,
        content_priority=priority,
        expansion_hints=hints,
    )
