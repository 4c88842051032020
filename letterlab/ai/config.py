from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from letterlab.core.config import _get_env, _get_env_float, _get_env_int

RECOGNIZED_OPTIONS = frozenset(
    {
        "provider",
        "api_key",
        "model",
        "temperature",
        "max_tokens",
        "timeout_s",
        "max_retries",
        "base_url",
        "response_format",
        "max_attempts",
    }
)


class InvalidConfigurationError(RuntimeError):
    pass


@dataclass(frozen=True)
class AIConfig:
    provider: str = "openai"
    api_key: str | None = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.1
    max_tokens: int = 2000
    timeout_s: float = 30.0
    max_retries: int = 0
    base_url: str | None = None
    response_format: str = ""
    max_attempts: int = 3


def load_ai_config() -> AIConfig:
    return AIConfig(
        provider=(os.getenv("AI_PROVIDER") or "openai").strip().lower(),
        api_key=(_get_env("OPENAI_API_KEY") or "").strip() or None,
        model=(os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip(),
        temperature=_get_env_float("OPENAI_TEMPERATURE", 0.1),
        max_tokens=_get_env_int("OPENAI_MAX_TOKENS", 2000),
        timeout_s=_get_env_float("OPENAI_TIMEOUT_S", 30.0),
        max_retries=_get_env_int("OPENAI_MAX_RETRIES", 0),
        base_url=(_get_env("OPENAI_BASE_URL") or "").strip() or None,
        response_format=(os.getenv("OPENAI_RESPONSE_FORMAT") or "").strip().lower(),
        max_attempts=_get_env_int("COMPLETION_MAX_ATTEMPTS", 3),
    )


def configure(**options: Any) -> AIConfig:
    """Build an AIConfig from the environment, overridden by explicit options.

    Only names in RECOGNIZED_OPTIONS are accepted. Nothing is stored globally;
    the returned config is handed to whoever constructs the provider.
    """
    unknown = sorted(set(options) - RECOGNIZED_OPTIONS)
    if unknown:
        raise ValueError(f"Unrecognized AI config option(s): {', '.join(unknown)}")

    cfg = replace(load_ai_config(), **options)
    if cfg.max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    if cfg.max_tokens < 1:
        raise ValueError("max_tokens must be positive")
    return cfg
