"""Helper utility functions."""

import json
from typing import Any, Dict, Iterable, Optional


def extract_json(content: str) -> Dict[str, Any]:
    """Parse a JSON object out of an LLM response.

    Models sometimes wrap the payload in a markdown code fence even when asked
    for raw JSON, so the fence is stripped before parsing.

    Raises:
        ValueError: if the content is empty or does not decode to a JSON object.
    """
    if not content or not content.strip():
        raise ValueError("Empty response content")

    text = content.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()

    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def format_list(values: Optional[Iterable[Any]], empty: str = "None") -> str:
    """Join values for a prompt line, falling back to `empty`."""
    items = [getattr(v, "value", v) for v in (values or [])]
    return ", ".join(str(v) for v in items) if items else empty


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"
