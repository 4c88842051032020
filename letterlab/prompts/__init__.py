"""Prompt templates for every structured-extraction call.

Each builder is a pure function: raw text in, complete instruction string out,
with the JSON shape the model must emit embedded as literal text.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from letterlab.schemas.analysis import PromptKind

from .case_study import build_case_study_prompt
from .common import (
    EXTRACTION_SYSTEM_PROMPT,
    SIMPLIFIED_SYSTEM_PROMPT,
    build_simplified_prompt,
    recover_source_text,
)
from .cover_letter import (
    build_cover_letter_prompt,
    build_cover_letter_stories_prompt,
    build_template_prompt,
)
from .evaluation import EVALUATION_SYSTEM_PROMPT, build_evaluation_prompt
from .linkedin import build_linkedin_prompt
from .matching import build_job_matching_prompt
from .resume import build_resume_prompt
from .tagging import build_content_tagging_prompt

_TEXT_BUILDERS: dict[PromptKind, Callable[[str], str]] = {
    PromptKind.RESUME: build_resume_prompt,
    PromptKind.COVER_LETTER: build_cover_letter_prompt,
    PromptKind.COVER_LETTER_STORIES: build_cover_letter_stories_prompt,
    PromptKind.COVER_LETTER_TEMPLATE: build_template_prompt,
    PromptKind.CASE_STUDY: build_case_study_prompt,
    PromptKind.LINKEDIN: build_linkedin_prompt,
}


def build(
    kind: PromptKind | str,
    raw_text: str,
    extra_context: Mapping[str, Any] | None = None,
) -> str:
    """Render the prompt for ``kind`` around ``raw_text``.

    ``extra_context`` carries the inputs some prompt shapes need beyond the
    text: ``job_description`` for job matching, ``content_type`` for tagging,
    and ``structured_data`` / ``document_type`` / ``has_unified_work_history``
    / ``has_template`` for evaluation.
    """
    prompt_kind = PromptKind(kind)
    text = raw_text or ""
    context = dict(extra_context or {})

    builder = _TEXT_BUILDERS.get(prompt_kind)
    if builder is not None:
        return builder(text)

    if prompt_kind is PromptKind.JOB_MATCHING:
        return build_job_matching_prompt(text, str(context.get("job_description") or ""))

    if prompt_kind is PromptKind.CONTENT_TAGGING:
        return build_content_tagging_prompt(text, context.get("content_type") or "story")

    return build_evaluation_prompt(
        context.get("structured_data") or {},
        text,
        str(context.get("document_type") or "resume"),
        has_unified_work_history=bool(context.get("has_unified_work_history")),
        has_template=bool(context.get("has_template")),
    )


__all__ = [
    "EVALUATION_SYSTEM_PROMPT",
    "EXTRACTION_SYSTEM_PROMPT",
    "SIMPLIFIED_SYSTEM_PROMPT",
    "build",
    "build_case_study_prompt",
    "build_content_tagging_prompt",
    "build_cover_letter_prompt",
    "build_cover_letter_stories_prompt",
    "build_evaluation_prompt",
    "build_job_matching_prompt",
    "build_linkedin_prompt",
    "build_resume_prompt",
    "build_simplified_prompt",
    "build_template_prompt",
    "recover_source_text",
]
