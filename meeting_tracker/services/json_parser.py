"""
JSON Parser utility for parsing LLM output as structured JSON.

Chat models wrap JSON in markdown code fences and, when they run out of
tokens, cut arrays off mid-element. The helpers here are split into pure
text -> text steps so each can be tested on its own:

1. strip_code_fences: remove a surrounding ``` / ```json fence
2. repair_truncated_array: close an array that was cut off
3. parse_model_json: both of the above, then json.loads
"""
import json
import logging
from typing import Any, Optional

from meeting_tracker.core.exceptions import MalformedModelOutputError

logger = logging.getLogger(__name__)

FENCE = "```"


def strip_code_fences(response: str) -> str:
    """
    Remove an optional markdown code fence around the model output.

    When the trimmed text starts with a fence, everything up to and including
    the opening fence line is dropped, as is everything from the last line
    that is exactly a closing fence. Text without a leading fence is only
    trimmed, so applying this twice gives the same result as applying it once.
    """
    text = (response or "").strip()
    if not text.startswith(FENCE):
        return text

    lines = text.split("\n")
    start = 0
    end = len(lines)

    for i, line in enumerate(lines):
        if line.strip().startswith(FENCE):
            start = i + 1
            break

    for i in range(len(lines) - 1, start - 1, -1):
        if lines[i].strip() == FENCE:
            end = i
            break

    return "\n".join(lines[start:end]).strip()


def _last_complete_element_end(text: str) -> Optional[int]:
    """
    Return the index just past the last `}` closing a top-level array element.

    The scan is string-aware, so braces inside JSON strings are ignored.
    Returns None when the array holds no complete object.
    """
    depth = 0
    in_string = False
    escaped = False
    last_end = None

    for i, ch in enumerate(text[1:], start=1):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in "{[":
            depth += 1
        elif ch in "}]":
            depth -= 1
            if depth < 0:
                break
            if depth == 0 and ch == "}":
                last_end = i + 1

    return last_end


def repair_truncated_array(text: str) -> str:
    """
    Best-effort repair of a JSON array that was cut off.

    Only text that starts with `[` and does not end with `]` is touched: it is
    truncated after the last complete object element and the array is closed
    again. Everything else, including well-formed arrays, comes back unchanged.

    Raises:
        MalformedModelOutputError: If no complete element can be recovered
    """
    stripped = text.strip()
    if not stripped.startswith("[") or stripped.endswith("]"):
        return text

    logger.warning("Detected potentially truncated JSON array, attempting to repair")

    cut = _last_complete_element_end(stripped)
    if cut is None:
        raise MalformedModelOutputError(
            "JSON response appears to be truncated and cannot be repaired"
        )

    return stripped[:cut] + "\n]"


def parse_model_json(response: str) -> Any:
    """
    Parse a chat model response as JSON.

    Args:
        response: Raw assistant message content

    Returns:
        The decoded JSON value (usually a list of dicts)

    Raises:
        MalformedModelOutputError: If the output is empty, does not look like
            a JSON array/object, cannot be repaired, or fails to decode
    """
    if not response or not response.strip():
        raise MalformedModelOutputError("Model output was empty")

    json_str = strip_code_fences(response)

    if not json_str.startswith(("[", "{")):
        logger.debug(f"Non-JSON model output (first 200 chars): {json_str[:200]}")
        raise MalformedModelOutputError(
            "Extracted content does not appear to be valid JSON"
        )

    json_str = repair_truncated_array(json_str)

    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parsing of model output failed: {e}")
        logger.debug(f"Original response (first 500 chars): {response[:500]}")
        raise MalformedModelOutputError(f"Failed to parse AI response: {e.msg}")
