from __future__ import annotations

import logging
import re
from typing import Any

from openai import APIConnectionError, APIStatusError

from letterlab.ai.config import AIConfig, load_ai_config
from letterlab.ai.factory import get_ai_client
from letterlab.ai.types import ChatMessage, CompletionClient
from letterlab.core.config import settings
from letterlab.prompts import (
    EXTRACTION_SYSTEM_PROMPT,
    SIMPLIFIED_SYSTEM_PROMPT,
    build_simplified_prompt,
    recover_source_text,
)
from letterlab.schemas.analysis import CompletionAttempt, CompletionOutcome, ErrorKind, RetryReason
from letterlab.services.json_repair import MalformedJsonError, parse_json
from letterlab.services.token_budget import (
    estimate_text_tokens,
    token_limit_retry_ceiling,
    truncation_retry_ceiling,
)

logger = logging.getLogger(__name__)

SIMPLIFIED_TEMPERATURE = 0.1

_TOKEN_LIMIT_PATTERN = re.compile(
    r"context[ _]length|maximum context|context window|max_tokens|too many tokens|token limit|reduce the length",
    re.IGNORECASE,
)
_RATE_LIMIT_PATTERN = re.compile(r"rate[ _]limit", re.IGNORECASE)

RETRYABLE_ERRORS = frozenset(
    {
        ErrorKind.TOKEN_LIMIT_EXCEEDED,
        ErrorKind.RATE_LIMITED,
        ErrorKind.SERVER_ERROR,
        ErrorKind.TRUNCATED,
        ErrorKind.MALFORMED_JSON,
        ErrorKind.NETWORK_FAILURE,
        ErrorKind.EMPTY_RESPONSE,
    }
)


def classify_http_error(status: int | None, message: str) -> ErrorKind:
    if status == 429 or _RATE_LIMIT_PATTERN.search(message):
        return ErrorKind.RATE_LIMITED
    if _TOKEN_LIMIT_PATTERN.search(message):
        return ErrorKind.TOKEN_LIMIT_EXCEEDED
    if status is not None and status >= 500:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.CLIENT_ERROR


def _preview(text: str | None) -> str:
    return (text or "")[: settings.log_response_max_chars]


class CompletionOrchestrator:
    """Turns a prompt and a starting ceiling into a parsed JSON object.

    Recoverable failures are healed by a bounded chain of attempts: one
    token-limit retry, one truncation retry and one simplified-prompt retry,
    never more than ``config.max_attempts`` calls in total. Rate limits and
    server errors are handed back to the caller as retryable failures.
    """

    def __init__(self, client: CompletionClient, config: AIConfig | None = None):
        self._client = client
        self._config = config or load_ai_config()

    @classmethod
    def from_config(cls, config: AIConfig | None = None) -> "CompletionOrchestrator":
        cfg = config or load_ai_config()
        return cls(get_ai_client(cfg), cfg)

    @property
    def config(self) -> AIConfig:
        return self._config

    async def call(
        self,
        prompt_text: str,
        token_ceiling: int,
        *,
        system_prompt: str = EXTRACTION_SYSTEM_PROMPT,
        temperature: float | None = None,
        retry_reason: RetryReason = RetryReason.INITIAL,
    ) -> CompletionAttempt:
        temp = self._config.temperature if temperature is None else temperature
        messages = [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=prompt_text),
        ]
        base: dict[str, Any] = {
            "prompt_text": prompt_text,
            "token_ceiling": token_ceiling,
            "temperature": temp,
            "retry_reason": retry_reason,
        }

        try:
            response = await self._client.complete(messages, max_tokens=token_ceiling, temperature=temp)
        except APIStatusError as exc:
            kind = classify_http_error(exc.status_code, exc.message or str(exc))
            logger.warning(
                "completion_http_error status=%s kind=%s ceiling=%s: %s",
                exc.status_code,
                kind.value,
                token_ceiling,
                exc.message,
            )
            return CompletionAttempt(
                **base,
                http_status=exc.status_code,
                error_kind=kind,
                error_message=exc.message or f"HTTP {exc.status_code}",
            )
        except APIConnectionError as exc:
            logger.warning("completion_connection_failed ceiling=%s: %s", token_ceiling, exc)
            return CompletionAttempt(**base, error_kind=ErrorKind.NETWORK_FAILURE, error_message=str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.warning("completion_call_failed ceiling=%s: %s", token_ceiling, exc)
            return CompletionAttempt(
                **base,
                error_kind=ErrorKind.NETWORK_FAILURE,
                error_message=str(exc) or "Completion API call failed",
            )

        content = response.content or ""
        common = {
            **base,
            "http_status": 200,
            "finish_reason": response.finish_reason,
            "raw_response_text": content,
            "completion_tokens": response.completion_tokens,
        }
        if response.finish_reason == "length":
            return CompletionAttempt(
                **common,
                error_kind=ErrorKind.TRUNCATED,
                error_message="Response truncated at token ceiling",
            )
        if not content.strip():
            return CompletionAttempt(**common, error_kind=ErrorKind.EMPTY_RESPONSE, error_message="No content in response")
        return CompletionAttempt(**common)

    async def complete(
        self,
        prompt_text: str,
        token_ceiling: int | None = None,
        *,
        system_prompt: str = EXTRACTION_SYSTEM_PROMPT,
        temperature: float | None = None,
        source_text: str | None = None,
        allow_simplified: bool = True,
    ) -> CompletionOutcome:
        ceiling = token_ceiling or self._config.max_tokens
        prompt = prompt_text
        system = system_prompt
        temp = temperature
        reason = RetryReason.INITIAL
        used: set[RetryReason] = set()
        attempts: list[CompletionAttempt] = []

        while len(attempts) < self._config.max_attempts:
            attempt = await self.call(prompt, ceiling, system_prompt=system, temperature=temp, retry_reason=reason)
            attempts.append(attempt)
            kind = attempt.error_kind

            if kind is ErrorKind.TOKEN_LIMIT_EXCEEDED and RetryReason.TOKEN_LIMIT not in used:
                used.add(RetryReason.TOKEN_LIMIT)
                next_ceiling = token_limit_retry_ceiling(prompt)
                logger.info(
                    "completion_retry reason=token_limit ceiling=%s next_ceiling=%s", ceiling, next_ceiling
                )
                ceiling, reason = next_ceiling, RetryReason.TOKEN_LIMIT
                continue

            if kind is ErrorKind.TRUNCATED and RetryReason.TRUNCATION not in used:
                used.add(RetryReason.TRUNCATION)
                observed = attempt.completion_tokens or estimate_text_tokens(attempt.raw_response_text or "")
                next_ceiling = truncation_retry_ceiling(ceiling, observed)
                if next_ceiling is not None:
                    logger.info(
                        "completion_retry reason=truncation ceiling=%s observed=%s next_ceiling=%s",
                        ceiling,
                        observed,
                        next_ceiling,
                    )
                    ceiling, reason = next_ceiling, RetryReason.TRUNCATION
                    continue
                # Already at the ceiling maximum: parse what came back.
                logger.info("completion_truncation_at_max ceiling=%s observed=%s", ceiling, observed)

            if not attempt.ok:
                retryable = kind in RETRYABLE_ERRORS or RetryReason.SIMPLIFIED_PROMPT in used
                return self._failure(attempt.error_message or kind.value, retryable, attempts)

            try:
                data = parse_json(attempt.raw_response_text)
            except MalformedJsonError as exc:
                logger.debug("completion_malformed_json raw=%r", _preview(attempt.raw_response_text))
                if allow_simplified and RetryReason.SIMPLIFIED_PROMPT not in used:
                    used.add(RetryReason.SIMPLIFIED_PROMPT)
                    source = source_text if source_text is not None else recover_source_text(prompt_text)
                    prompt = build_simplified_prompt(source)
                    system = SIMPLIFIED_SYSTEM_PROMPT
                    temp = SIMPLIFIED_TEMPERATURE
                    ceiling = self._config.max_tokens
                    reason = RetryReason.SIMPLIFIED_PROMPT
                    logger.info("completion_retry reason=simplified_prompt ceiling=%s", ceiling)
                    continue
                return self._failure(f"Invalid JSON response from model: {exc}", True, attempts)

            return CompletionOutcome(success=True, data=data, attempts=tuple(attempts))

        return self._failure(
            f"Completion retry budget exhausted after {len(attempts)} attempts",
            True,
            attempts,
        )

    def _failure(self, error: str, retryable: bool, attempts: list[CompletionAttempt]) -> CompletionOutcome:
        logger.warning(
            "completion_failed attempts=%s retryable=%s model=%s: %s",
            len(attempts),
            retryable,
            self._config.model,
            error,
        )
        return CompletionOutcome(success=False, error=error, retryable=retryable, attempts=tuple(attempts))
