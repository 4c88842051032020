from .analysis import (
    AnalysisRequest,
    AnalysisResult,
    CompletionAttempt,
    CompletionOutcome,
    DocumentType,
    ErrorKind,
    PromptKind,
    RetryReason,
    TokenBudget,
)
from .evaluation import EvaluationVerdict, HeuristicResult, fail_closed_verdict
from .structured import (
    ContactInfo,
    ContentTags,
    CoverLetterStories,
    CoverLetterTemplate,
    JobMatch,
    StructuredResumeData,
)

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "CompletionAttempt",
    "CompletionOutcome",
    "DocumentType",
    "ErrorKind",
    "PromptKind",
    "RetryReason",
    "TokenBudget",
    "EvaluationVerdict",
    "HeuristicResult",
    "fail_closed_verdict",
    "ContactInfo",
    "ContentTags",
    "CoverLetterStories",
    "CoverLetterTemplate",
    "JobMatch",
    "StructuredResumeData",
]
