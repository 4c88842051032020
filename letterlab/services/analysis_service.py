from __future__ import annotations

import logging
from typing import Any

from letterlab.ai.config import AIConfig
from letterlab.prompts import build
from letterlab.prompts.tagging import ContentKind
from letterlab.schemas.analysis import AnalysisRequest, AnalysisResult, DocumentType, PromptKind
from letterlab.services.completion import CompletionOrchestrator
from letterlab.services.domain_mapper import map_to_domain
from letterlab.services.token_budget import estimate_token_budget

logger = logging.getLogger(__name__)


class LLMAnalysisService:
    def __init__(self, orchestrator: CompletionOrchestrator):
        self._orchestrator = orchestrator

    @classmethod
    def from_config(cls, config: AIConfig | None = None) -> "LLMAnalysisService":
        return cls(CompletionOrchestrator.from_config(config))

    @property
    def orchestrator(self) -> CompletionOrchestrator:
        return self._orchestrator

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        document_type = DocumentType(request.document_type)
        kind = PromptKind(document_type.value)
        budget = estimate_token_budget(request.raw_text, document_type)
        logger.info(
            "analysis_started document_type=%s text_len=%s ceiling=%s complexity=%s",
            document_type.value,
            len(request.raw_text or ""),
            budget.final_token_ceiling,
            budget.complexity_multiplier,
        )
        prompt = build(kind, request.raw_text, request.optional_context)
        return await self._run(
            kind,
            prompt,
            budget.final_token_ceiling,
            source_text=request.raw_text or "",
            allow_simplified=True,
        )

    async def analyze_resume(self, text: str) -> AnalysisResult:
        return await self.analyze(AnalysisRequest(raw_text=text, document_type=DocumentType.RESUME))

    async def analyze_cover_letter(self, text: str) -> AnalysisResult:
        return await self.analyze(AnalysisRequest(raw_text=text, document_type=DocumentType.COVER_LETTER))

    async def analyze_case_study(self, text: str) -> AnalysisResult:
        return await self.analyze(AnalysisRequest(raw_text=text, document_type=DocumentType.CASE_STUDY))

    async def analyze_linkedin(self, text: str) -> AnalysisResult:
        return await self.analyze(AnalysisRequest(raw_text=text, document_type=DocumentType.LINKEDIN))

    async def extract_template(self, text: str) -> AnalysisResult:
        budget = estimate_token_budget(text, DocumentType.COVER_LETTER)
        prompt = build(PromptKind.COVER_LETTER_TEMPLATE, text)
        return await self._run(PromptKind.COVER_LETTER_TEMPLATE, prompt, budget.final_token_ceiling)

    async def extract_cover_letter_stories(self, text: str) -> AnalysisResult:
        budget = estimate_token_budget(text, DocumentType.COVER_LETTER)
        prompt = build(PromptKind.COVER_LETTER_STORIES, text)
        return await self._run(PromptKind.COVER_LETTER_STORIES, prompt, budget.final_token_ceiling)

    async def match_job(self, content: str, job_description: str) -> AnalysisResult:
        prompt = build(PromptKind.JOB_MATCHING, content, {"job_description": job_description})
        return await self._run(PromptKind.JOB_MATCHING, prompt, None)

    async def tag_content(self, content: str, content_type: ContentKind = "story") -> AnalysisResult:
        prompt = build(PromptKind.CONTENT_TAGGING, content, {"content_type": content_type})
        return await self._run(PromptKind.CONTENT_TAGGING, prompt, None)

    async def _run(
        self,
        kind: PromptKind,
        prompt: str,
        token_ceiling: int | None,
        *,
        source_text: str | None = None,
        allow_simplified: bool = False,
    ) -> AnalysisResult:
        try:
            outcome = await self._orchestrator.complete(
                prompt,
                token_ceiling,
                source_text=source_text,
                allow_simplified=allow_simplified,
            )
            if not outcome.success:
                return AnalysisResult(
                    success=False,
                    error=outcome.error,
                    retryable=outcome.retryable,
                    attempt_count=len(outcome.attempts),
                )

            raw: dict[str, Any] = outcome.data or {}
            return AnalysisResult(
                success=True,
                data=map_to_domain(raw, kind),
                raw_data=raw,
                attempt_count=len(outcome.attempts),
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("analysis_failed kind=%s: %s", kind.value, exc)
            return AnalysisResult(success=False, error=str(exc) or "LLM analysis failed", retryable=True)
