from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json|JSON)?\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")
_STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"')
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
_BARE_KEY = re.compile(r"([{,]\s*)([A-Za-z_]\w*)(\s*:)")
# Only ever applied to the gap right after a key literal.
_BARE_VALUE = re.compile(r"\A(\s*:\s*)([^\s\"\[{][^,}\]]*?)(\s*[,}])")
_JSON_LITERAL = re.compile(r"^(?:true|false|null|-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)$")


class MalformedJsonError(ValueError):
    def __init__(self, message: str, *, cleaned: str = ""):
        super().__init__(message)
        self.cleaned = cleaned


def strip_code_fences(content: str) -> str:
    cleaned = (content or "").strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned


def extract_object_span(content: str) -> str:
    start = content.find("{")
    end = content.rfind("}")
    if start != -1 and end > start:
        return content[start : end + 1]
    return content


def _rewrite_outside_strings(content: str, rewrite: Callable[[str, bool], str]) -> str:
    """Apply ``rewrite`` to every gap between string literals.

    The flag tells the callback whether the gap directly follows a literal.
    String literals themselves are copied through untouched.
    """
    parts: list[str] = []
    position = 0
    after_string = False
    for match in _STRING_LITERAL.finditer(content):
        parts.append(rewrite(content[position : match.start()], after_string))
        parts.append(match.group(0))
        position = match.end()
        after_string = True
    parts.append(rewrite(content[position:], after_string))
    return "".join(parts)


def drop_trailing_commas(content: str) -> str:
    return _rewrite_outside_strings(content, lambda gap, _: _TRAILING_COMMA.sub(r"\1", gap))


def quote_bare_keys(content: str) -> str:
    return _rewrite_outside_strings(content, lambda gap, _: _BARE_KEY.sub(r'\1"\2"\3', gap))


def _quote_bare_value(match: re.Match[str]) -> str:
    token = match.group(2).strip()
    if _JSON_LITERAL.match(token):
        return match.group(0)
    return f"{match.group(1)}{json.dumps(token)}{match.group(3)}"


def quote_bare_values(content: str) -> str:
    def rewrite(gap: str, after_string: bool) -> str:
        if not after_string:
            return gap
        return _BARE_VALUE.sub(_quote_bare_value, gap, count=1)

    return _rewrite_outside_strings(content, rewrite)


# Cheapest and least invasive first; each step builds on the previous one.
_REPAIRS: tuple[Callable[[str], str], ...] = (drop_trailing_commas, quote_bare_keys, quote_bare_values)


def repair_json_text(content: str) -> str:
    """Text-level fixes for the usual model slips: trailing commas, bare keys, bare values."""
    fixed = content
    for repair in _REPAIRS:
        fixed = repair(fixed)
    return fixed


def _loads_object(content: str) -> dict[str, Any]:
    parsed = json.loads(content)
    if not isinstance(parsed, dict):
        raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def parse_json(content: str | None) -> dict[str, Any]:
    """Parse a model response into a JSON object.

    Stage one strips Markdown fences and slices from the first ``{`` to the
    last ``}``. Stage two applies the repairs one at a time, re-parsing after
    each, so text that only needed the first fix is never touched by the
    later ones. Raises MalformedJsonError when every attempt fails.
    """
    cleaned = extract_object_span(strip_code_fences(content or ""))

    try:
        return _loads_object(cleaned)
    except ValueError as first_error:
        logger.debug("json_parse_stage1_failed: %s", first_error)

    fixed = cleaned
    last_error: ValueError | None = None
    for repair in _REPAIRS:
        repaired = repair(fixed)
        if repaired == fixed and last_error is not None:
            continue
        fixed = repaired
        try:
            return _loads_object(fixed)
        except ValueError as exc:
            last_error = exc
            logger.debug("json_repair_step_failed step=%s: %s", repair.__name__, exc)

    logger.warning("json_parse_failed cleaned_len=%s: %s", len(cleaned), last_error)
    raise MalformedJsonError(f"Invalid JSON response: {last_error}", cleaned=cleaned) from last_error
