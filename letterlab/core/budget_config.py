from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from letterlab.schemas.analysis import DocumentType

DEFAULT_BUDGET_CONFIG_PATH = Path(__file__).resolve().parent / "token_budget.yaml"

# Every number the estimator and the retry ceilings read.
_REQUIRED_NUMBERS = (
    "chars_per_token",
    "complexity.base",
    "complexity.cap",
    "complexity.words_per_line.threshold",
    "complexity.words_per_line.increment",
    "structural_overhead.default",
    "safety_buffer_factor",
    "fixed_pad",
    "ceiling.min",
    "ceiling.max",
    "retry.token_limit_cap",
    "retry.token_limit_prompt_factor",
    "retry.truncation_cap",
    "retry.truncation_factor",
)
_MISSING = object()


class BudgetConfigError(RuntimeError):
    pass


def _lookup(config: Any, path: str, default: Any = _MISSING) -> Any:
    current = config
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_budget_config(config: Any, source: str = "token budget config") -> dict[str, Any]:
    """Check that every section the estimator reads is present and typed."""
    if not isinstance(config, dict):
        raise BudgetConfigError(f"{source}: expected a top-level mapping")

    for path in _REQUIRED_NUMBERS:
        if not _is_number(_lookup(config, path)):
            raise BudgetConfigError(f"{source}: '{path}' must be a number")

    for document_type in DocumentType:
        path = f"type_multipliers.{document_type.value}"
        if not _is_number(_lookup(config, path)):
            raise BudgetConfigError(f"{source}: '{path}' must be a number")

    for rule in _lookup(config, "complexity.word_count", []) or []:
        if not isinstance(rule, dict) or not _is_number(rule.get("threshold")) or not _is_number(rule.get("increment")):
            raise BudgetConfigError(f"{source}: 'complexity.word_count' entries need numeric threshold and increment")

    keyword_rules = _lookup(config, "complexity.keyword_hits", {}) or {}
    if not isinstance(keyword_rules, dict):
        raise BudgetConfigError(f"{source}: 'complexity.keyword_hits' must be a mapping")
    for group in keyword_rules:
        words = _lookup(config, f"keywords.{group}")
        if not isinstance(words, list) or not all(isinstance(word, str) and word for word in words):
            raise BudgetConfigError(f"{source}: 'keywords.{group}' must be a list of words")

    low, high = _lookup(config, "ceiling.min"), _lookup(config, "ceiling.max")
    if low > high:
        raise BudgetConfigError(f"{source}: 'ceiling.min' ({low}) is above 'ceiling.max' ({high})")
    return config


def load_budget_config(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise BudgetConfigError(f"Cannot read token budget config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise BudgetConfigError(f"Token budget config '{path}' is not valid YAML: {exc}") from exc

    return validate_budget_config(parsed, source=f"Token budget config '{path}'")


@lru_cache(maxsize=1)
def get_budget_config() -> dict[str, Any]:
    """The active budget config; ``TOKEN_BUDGET_CONFIG`` points at an alternative file."""
    override = (os.getenv("TOKEN_BUDGET_CONFIG") or "").strip()
    return load_budget_config(Path(override) if override else DEFAULT_BUDGET_CONFIG_PATH)


def get_budget_value(path: str, default: Any = None) -> Any:
    """Dot-path lookup in the active config, e.g. ``retry.truncation_cap``."""
    if not path:
        return default
    return _lookup(get_budget_config(), path, default)
