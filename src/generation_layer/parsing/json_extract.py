"""
Helpers for recovering JSON from free-text model output.

Model output is nominally JSON but frequently arrives wrapped in a markdown
code fence or surrounded by prose. These helpers strip fences and locate
balanced JSON spans without trusting anything about the surrounding text.
"""

import json
import re
from typing import Any, Iterator

from .exceptions import ResponseParseError

_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\r?\n?")
_CLOSING_FENCE = re.compile(r"\s*```\s*$")

_CLOSERS = {"{": "}", "[": "]"}


def strip_code_fences(text: str) -> str:
    """
    Trim the text and remove a surrounding markdown code fence.

    Handles both "```json" and bare "```" openers. Text that does not start
    with a fence is returned trimmed but otherwise untouched.

    Examples:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
        >>> strip_code_fences('  {"a": 1}  ')
        '{"a": 1}'
    """
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    stripped = _OPENING_FENCE.sub("", stripped, count=1)
    stripped = _CLOSING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def balanced_spans(text: str, opener: str = "{") -> Iterator[str]:
    """
    Yield top-level balanced bracket spans of `text`, in order.

    Only spans that open at nesting depth 0 are yielded, so a span nested
    inside another is never returned on its own. Brackets inside JSON string
    literals (including escaped quotes) are ignored. An opener that is never
    closed, as in output truncated at the token limit, ends the scan.
    Runs in a single linear pass.

    Args:
        text: Text to scan
        opener: "{" for objects, "[" for arrays
    """
    closer = _CLOSERS[opener]
    depth = 0
    start = 0
    in_string = False
    escaped = False

    for index, char in enumerate(text):
        if depth == 0:
            if char == opener:
                depth = 1
                start = index
            continue

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                yield text[start:index + 1]


def load_json(content: str) -> Any:
    """
    Parse a JSON document.

    Raises:
        ResponseParseError: Empty content or invalid JSON
    """
    if not content or not content.strip():
        raise ResponseParseError(
            "Model output is empty or whitespace-only",
            raw_content=content,
            parse_error="Empty content",
        )
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ResponseParseError(
            f"Failed to parse model output as JSON: {e.msg}",
            raw_content=content,
            parse_error=f"{e.msg} at line {e.lineno} col {e.colno}",
        ) from e


def find_embedded_json(text: str, expected: type, opener: str) -> Any | None:
    """
    Return the first balanced span of `text` that decodes to `expected`.

    Returns None when no span decodes to the expected type.
    """
    for span in balanced_spans(text, opener):
        try:
            value = json.loads(span)
        except json.JSONDecodeError:
            continue
        if isinstance(value, expected):
            return value
    return None
