from __future__ import annotations

from typing import Any, Sequence

import httpx
from openai import (
    APIConnectionError,
    APIStatusError,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    RateLimitError,
)

from letterlab.ai.config import AIConfig
from letterlab.ai.types import ChatMessage, CompletionResponse
from letterlab.services.completion import CompletionOrchestrator

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")

_STATUS_ERRORS = {
    400: BadRequestError,
    401: AuthenticationError,
    429: RateLimitError,
    500: InternalServerError,
}


def reply(content: str, finish_reason: str = "stop", completion_tokens: int | None = None) -> CompletionResponse:
    return CompletionResponse(content=content, finish_reason=finish_reason, completion_tokens=completion_tokens)


def http_error(status: int, message: str) -> APIStatusError:
    cls = _STATUS_ERRORS.get(status, APIStatusError)
    return cls(message, response=httpx.Response(status, request=_REQUEST), body=None)


def connection_error() -> APIConnectionError:
    return APIConnectionError(request=_REQUEST)


class ScriptedClient:
    """Completion client that replays canned responses or raises canned errors."""

    def __init__(self, *steps: Any):
        self.steps = list(steps)
        self.calls: list[dict[str, Any]] = []

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
    ) -> CompletionResponse:
        self.calls.append(
            {"messages": list(messages), "max_tokens": max_tokens, "temperature": temperature}
        )
        if not self.steps:
            raise AssertionError("unexpected completion call")
        step = self.steps.pop(0)
        if isinstance(step, BaseException):
            raise step
        return step


def make_orchestrator(*steps: Any, **overrides: Any) -> tuple[CompletionOrchestrator, ScriptedClient]:
    client = ScriptedClient(*steps)
    config = AIConfig(api_key="sk-test", **overrides)
    return CompletionOrchestrator(client, config), client
