from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

VERDICT_LABELS: dict[str, tuple[str, ...]] = {
    "accuracy": ("✅ Accurate", "⚠ Partially Accurate", "❌ Inaccurate"),
    "relevance": ("✅ Relevant", "⚠ Somewhat Relevant", "❌ Not Relevant"),
    "personalization": ("✅ Personalized", "⚠ Weak Personalization", "❌ Generic"),
    "clarity_tone": ("✅ Clear & Professional", "⚠ Minor Issues", "❌ Unclear or Fluffy"),
    "framework": ("✅ Structured", "⚠ Partial", "❌ Not Structured"),
    "go_nogo": ("✅ Go", "❌ No-Go"),
}

REQUIRED_VERDICT_FIELDS = tuple(VERDICT_LABELS)

# Most restrictive label per field.
FAIL_CLOSED_LABELS: dict[str, str] = {name: labels[-1] for name, labels in VERDICT_LABELS.items()}

PASSING_PREFIX = "✅"


def _label_key(value: str) -> str:
    return re.sub(r"[^a-z0-9]", "", value.lower())


_LABEL_LOOKUP: dict[str, dict[str, str]] = {
    name: {_label_key(label): label for label in labels} for name, labels in VERDICT_LABELS.items()
}


def normalize_label(field_name: str, value: Any) -> str:
    """Map a model-written label onto its canonical token, emoji optional."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string")
    canonical = _LABEL_LOOKUP[field_name].get(_label_key(value))
    if canonical is None:
        raise ValueError(f"{field_name} has unknown label {value!r}")
    return canonical


class EvaluationVerdict(BaseModel):
    accuracy: str
    relevance: str
    personalization: str
    clarity_tone: str
    framework: str
    go_nogo: str
    rationale: str = ""
    additional: dict[str, str] = Field(default_factory=dict)

    @field_validator(*REQUIRED_VERDICT_FIELDS, mode="before")
    @classmethod
    def _validate_label(cls, value: Any, info: ValidationInfo) -> str:
        return normalize_label(info.field_name, value)

    @property
    def is_go(self) -> bool:
        return self.go_nogo == VERDICT_LABELS["go_nogo"][0]

    def passing_count(self) -> int:
        criteria = (self.accuracy, self.relevance, self.personalization, self.clarity_tone, self.framework)
        return sum(1 for label in criteria if label.startswith(PASSING_PREFIX))


def fail_closed_verdict(reason: str) -> EvaluationVerdict:
    return EvaluationVerdict(**FAIL_CLOSED_LABELS, rationale=f"Evaluation failed: {reason}")


class HeuristicResult(BaseModel):
    has_work_experience: bool = False
    has_education: bool = False
    has_skills: bool = False
    has_contact_info: bool = False
    work_experience_count: int = 0
    education_count: int = 0
    skills_count: int = 0
    has_quantifiable_metrics: bool = False
    has_company_names: bool = False
    has_job_titles: bool = False
    data_completeness: int = Field(default=0, ge=0, le=100)
