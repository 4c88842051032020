from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentType(str, Enum):
    RESUME = "resume"
    COVER_LETTER = "coverLetter"
    CASE_STUDY = "caseStudy"
    LINKEDIN = "linkedin"


class PromptKind(str, Enum):
    RESUME = "resume"
    COVER_LETTER = "coverLetter"
    COVER_LETTER_TEMPLATE = "coverLetterTemplate"
    COVER_LETTER_STORIES = "coverLetterStories"
    CASE_STUDY = "caseStudy"
    LINKEDIN = "linkedin"
    JOB_MATCHING = "jobMatching"
    CONTENT_TAGGING = "contentTagging"
    EVALUATION = "evaluation"


class ErrorKind(str, Enum):
    NONE = "none"
    TOKEN_LIMIT_EXCEEDED = "token_limit_exceeded"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    TRUNCATED = "truncated"
    MALFORMED_JSON = "malformed_json"
    NETWORK_FAILURE = "network_failure"
    CLIENT_ERROR = "client_error"
    EMPTY_RESPONSE = "empty_response"


class RetryReason(str, Enum):
    INITIAL = "initial"
    TOKEN_LIMIT = "token_limit"
    TRUNCATION = "truncation"
    SIMPLIFIED_PROMPT = "simplified_prompt"


@dataclass(frozen=True)
class AnalysisRequest:
    raw_text: str
    document_type: DocumentType
    optional_context: dict[str, Any] | None = None


@dataclass(frozen=True)
class TokenBudget:
    content_token_estimate: int
    complexity_multiplier: float
    type_multiplier: float
    structural_overhead: int
    safety_buffer_factor: float
    final_token_ceiling: int


@dataclass(frozen=True)
class CompletionAttempt:
    prompt_text: str
    token_ceiling: int
    temperature: float
    retry_reason: RetryReason = RetryReason.INITIAL
    http_status: int | None = None
    finish_reason: str | None = None
    raw_response_text: str | None = None
    completion_tokens: int | None = None
    error_kind: ErrorKind = ErrorKind.NONE
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_kind in {ErrorKind.NONE, ErrorKind.TRUNCATED}


@dataclass(frozen=True)
class CompletionOutcome:
    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None
    retryable: bool = False
    attempts: tuple[CompletionAttempt, ...] = field(default_factory=tuple)


class AnalysisResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    data: Any = None
    raw_data: dict[str, Any] | None = None
    error: str | None = None
    retryable: bool = False
    attempt_count: int = 0
