"""Strict parsing of JSON arrays out of generative-model completions."""

import json
import re


# Reasoning models (qwen3, deepseek-r1) prefix answers with a <think> block
_REASONING_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)


class MalformedCompletionError(ValueError):
    """The completion was not the JSON array the caller asked for."""


def parse_json_array(response: str) -> list:
    """
    Parse a model completion that must be a JSON array.

    Only two wrappers are tolerated: a leading reasoning block and a
    markdown code fence around the whole answer. Anything else (prose around
    the array, a JSON object, truncated output) raises
    MalformedCompletionError so the caller can take its fallback path.

    Args:
        response: Raw completion text

    Returns:
        The decoded list
    """
    if not isinstance(response, str):
        raise MalformedCompletionError(f"Expected text, got {type(response).__name__}")

    text = _REASONING_BLOCK.sub("", response).strip()

    # Handle markdown code blocks
    if text.startswith("```"):
        lines = text.split("\n")
        if len(lines) < 2 or not lines[-1].strip().startswith("```"):
            raise MalformedCompletionError("Unterminated code fence in completion")
        text = "\n".join(lines[1:-1]).strip()

    if not text:
        raise MalformedCompletionError("Empty completion")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedCompletionError(f"Completion is not valid JSON: {e.msg}") from e

    if not isinstance(data, list):
        raise MalformedCompletionError(f"Expected a JSON array, got {type(data).__name__}")

    return data
