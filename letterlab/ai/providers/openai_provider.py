from __future__ import annotations

from typing import Any, Sequence

from openai import AsyncOpenAI

from letterlab.ai.config import AIConfig, InvalidConfigurationError
from letterlab.ai.types import ChatMessage, CompletionResponse


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


class OpenAIProvider:
    def __init__(self, config: AIConfig):
        key = (config.api_key or "").strip()
        if not key or _looks_like_placeholder(key):
            raise InvalidConfigurationError("OPENAI_API_KEY is missing")

        self._model = config.model
        self._response_format = config.response_format
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=config.base_url,
            timeout=config.timeout_s,
            max_retries=config.max_retries,
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
    ) -> CompletionResponse:
        payload = [{"role": m.role, "content": m.content} for m in messages]

        create_kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": payload,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if self._response_format == "json":
            create_kwargs["response_format"] = {"type": "json_object"}

        response = await self._client.chat.completions.create(**create_kwargs)

        choice = response.choices[0] if response.choices else None
        content = choice.message.content if choice is not None and choice.message else None
        usage = getattr(response, "usage", None)
        return CompletionResponse(
            content=content or "",
            finish_reason=getattr(choice, "finish_reason", None),
            completion_tokens=getattr(usage, "completion_tokens", None),
        )
