from __future__ import annotations

import math
import re
from functools import lru_cache

from letterlab.core.budget_config import get_budget_value
from letterlab.schemas.analysis import DocumentType, TokenBudget


def _chars_per_token() -> float:
    return float(get_budget_value("chars_per_token", 3.5))


def estimate_text_tokens(text: str) -> int:
    return math.ceil(len(text or "") / _chars_per_token())


def _ceil(value: float) -> int:
    # Rounding first keeps float noise (1440.0000000000002) from adding a token.
    return math.ceil(round(value, 6))


@lru_cache(maxsize=8)
def _keyword_pattern(group: str) -> re.Pattern[str] | None:
    words = get_budget_value(f"keywords.{group}", []) or []
    if not words:
        return None
    alternatives = "|".join(re.escape(str(word)) for word in words)
    return re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE)


def count_keyword_hits(text: str, group: str) -> int:
    pattern = _keyword_pattern(group)
    if pattern is None:
        return 0
    return len(pattern.findall(text))


def complexity_multiplier(text: str) -> float:
    complexity = float(get_budget_value("complexity.base", 1.0))
    cap = float(get_budget_value("complexity.cap", 2.0))

    words = text.split()
    word_count = len(words)
    for rule in get_budget_value("complexity.word_count", []) or []:
        if word_count > int(rule["threshold"]):
            complexity += float(rule["increment"])

    keyword_rules = get_budget_value("complexity.keyword_hits", {}) or {}
    for group, rule in keyword_rules.items():
        if count_keyword_hits(text, group) > int(rule["threshold"]):
            complexity += float(rule["increment"])

    lines = [line for line in text.splitlines() if line.strip()]
    if lines:
        words_per_line = word_count / len(lines)
        if words_per_line > float(get_budget_value("complexity.words_per_line.threshold", 15)):
            complexity += float(get_budget_value("complexity.words_per_line.increment", 0.1))

    return round(min(complexity, cap), 4)


def type_multiplier(document_type: DocumentType | str) -> float:
    key = DocumentType(document_type).value
    return float(get_budget_value(f"type_multipliers.{key}", 1.0))


def structural_overhead(document_type: DocumentType | str) -> int:
    key = DocumentType(document_type).value
    overhead = get_budget_value(f"structural_overhead.{key}")
    if overhead is None:
        overhead = get_budget_value("structural_overhead.default", 800)
    return int(overhead)


def clamp_ceiling(value: int) -> int:
    low = int(get_budget_value("ceiling.min", 800))
    high = int(get_budget_value("ceiling.max", 5000))
    return max(low, min(value, high))


def estimate_token_budget(raw_text: str, document_type: DocumentType | str) -> TokenBudget:
    """Size the output-token ceiling for one extraction call.

    The ceiling is over-provisioned on purpose (safety factor plus a fixed
    pad) so the common case never reaches the truncation retry.
    """
    text = raw_text or ""
    content_tokens = estimate_text_tokens(text)
    complexity = complexity_multiplier(text)
    type_mult = type_multiplier(document_type)
    overhead = structural_overhead(document_type)
    safety = float(get_budget_value("safety_buffer_factor", 1.8))
    pad = int(get_budget_value("fixed_pad", 500))

    raw_ceiling = (content_tokens * complexity * type_mult + overhead) * safety + pad
    return TokenBudget(
        content_token_estimate=content_tokens,
        complexity_multiplier=complexity,
        type_multiplier=type_mult,
        structural_overhead=overhead,
        safety_buffer_factor=safety,
        final_token_ceiling=clamp_ceiling(_ceil(raw_ceiling)),
    )


def token_limit_retry_ceiling(prompt_text: str) -> int:
    """Ceiling for the retry after the API rejected the request size."""
    factor = float(get_budget_value("retry.token_limit_prompt_factor", 2.0))
    cap = int(get_budget_value("retry.token_limit_cap", 4000))
    floor = int(get_budget_value("ceiling.min", 800))
    return max(min(_ceil(factor * estimate_text_tokens(prompt_text)), cap), floor)


def truncation_retry_ceiling(current_ceiling: int, observed_tokens: int) -> int | None:
    """Ceiling for the retry after a ``finish_reason == "length"`` response.

    Grows from the observed output up to the truncation cap; when that does
    not beat ``current_ceiling`` it grows the current ceiling instead, never
    past the overall ceiling maximum. Returns None when no larger ceiling is
    allowed.
    """
    factor = float(get_budget_value("retry.truncation_factor", 1.5))
    cap = int(get_budget_value("retry.truncation_cap", 4000))
    high = int(get_budget_value("ceiling.max", 5000))
    candidate = min(_ceil(factor * observed_tokens), cap)
    if candidate <= current_ceiling:
        candidate = min(max(_ceil(factor * current_ceiling), current_ceiling + 1), high)
    if candidate <= current_ceiling:
        return None
    return candidate
