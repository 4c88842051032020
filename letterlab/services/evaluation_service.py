from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import BaseModel

from letterlab.ai.config import AIConfig
from letterlab.prompts.evaluation import (
    ADDITIONAL_CRITERIA_FIELDS,
    EVALUATION_SYSTEM_PROMPT,
    build_evaluation_prompt,
)
from letterlab.schemas.evaluation import (
    REQUIRED_VERDICT_FIELDS,
    EvaluationVerdict,
    HeuristicResult,
    fail_closed_verdict,
)
from letterlab.services.completion import CompletionOrchestrator

logger = logging.getLogger(__name__)

EVALUATION_TOKEN_CEILING = 1000

_METRICS_PATTERN = re.compile(
    r"\d+%|\d+\+|\d+[kK]|\$[\d,]+|increased|decreased|improved|reduced|saved|grew|scaled",
    re.IGNORECASE,
)
_COMPANY_PATTERN = re.compile(r"company|inc|corp|ltd|llc|technologies|solutions", re.IGNORECASE)
_JOB_TITLE_PATTERN = re.compile(
    r"manager|director|engineer|analyst|specialist|coordinator|lead|senior|junior",
    re.IGNORECASE,
)


class EvaluationError(RuntimeError):
    pass


def _as_payload(structured_result: Any) -> Any:
    if isinstance(structured_result, BaseModel):
        return structured_result.model_dump(mode="json", by_alias=True)
    return structured_result


def validate_verdict(data: Any) -> EvaluationVerdict:
    if not isinstance(data, dict):
        raise EvaluationError("Invalid evaluation result structure")
    missing = [name for name in REQUIRED_VERDICT_FIELDS if not isinstance(data.get(name), str) or not data[name]]
    if missing:
        raise EvaluationError(f"Invalid evaluation result structure: missing {', '.join(missing)}")

    additional = {
        name: data[name] for name in ADDITIONAL_CRITERIA_FIELDS if isinstance(data.get(name), str)
    }
    rationale = data.get("rationale")
    return EvaluationVerdict(
        **{name: data[name] for name in REQUIRED_VERDICT_FIELDS},
        rationale=rationale if isinstance(rationale, str) else "",
        additional=additional,
    )


class EvaluationJudge:
    """LLM judge that grades an extraction against its source text.

    ``score`` never raises: any failure in the call or in validating the
    answer yields the fail-closed No-Go verdict.
    """

    def __init__(self, orchestrator: CompletionOrchestrator):
        self._orchestrator = orchestrator

    @classmethod
    def from_config(cls, config: AIConfig | None = None) -> "EvaluationJudge":
        return cls(CompletionOrchestrator.from_config(config))

    async def score(
        self,
        structured_result: Any,
        original_text: str,
        document_type: str,
        *,
        has_unified_work_history: bool = False,
        has_template: bool = False,
    ) -> EvaluationVerdict:
        try:
            prompt = build_evaluation_prompt(
                _as_payload(structured_result),
                original_text,
                str(getattr(document_type, "value", document_type)),
                has_unified_work_history=has_unified_work_history,
                has_template=has_template,
            )
            outcome = await self._orchestrator.complete(
                prompt,
                EVALUATION_TOKEN_CEILING,
                system_prompt=EVALUATION_SYSTEM_PROMPT,
                allow_simplified=False,
            )
            if not outcome.success:
                raise EvaluationError(outcome.error or "Evaluation call failed")
            verdict = validate_verdict(outcome.data)
        except Exception as exc:  # noqa: BLE001
            logger.warning("evaluation_failed document_type=%s: %s", document_type, exc)
            return fail_closed_verdict(str(exc) or "Unknown error")

        logger.info("evaluation_scored document_type=%s go_nogo=%s", document_type, verdict.go_nogo)
        return verdict

    @staticmethod
    def run_heuristics(structured_result: Any) -> HeuristicResult:
        """Deterministic cross-check of an extraction, independent of the model."""
        data = _as_payload(structured_result)
        if not isinstance(data, dict):
            data = {}

        work = data.get("workHistory", data.get("workExperience"))
        education = data.get("education")
        skills = data.get("skills")
        contact = data.get("contactInfo")

        result = HeuristicResult()
        if isinstance(work, list) and work:
            work_text = json.dumps(work, ensure_ascii=False)
            result.has_work_experience = True
            result.work_experience_count = len(work)
            result.has_quantifiable_metrics = bool(_METRICS_PATTERN.search(work_text))
            result.has_company_names = bool(_COMPANY_PATTERN.search(work_text))
            result.has_job_titles = bool(_JOB_TITLE_PATTERN.search(work_text))
        if isinstance(education, list) and education:
            result.has_education = True
            result.education_count = len(education)
        if isinstance(skills, list) and skills:
            result.has_skills = True
            result.skills_count = len(skills)
        if isinstance(contact, dict):
            result.has_contact_info = bool(contact.get("email") or contact.get("phone") or contact.get("linkedin"))

        checks = (
            result.has_work_experience,
            result.has_education,
            result.has_skills,
            result.has_contact_info,
            result.has_quantifiable_metrics,
            result.has_company_names,
            result.has_job_titles,
        )
        result.data_completeness = round(sum(checks) / len(checks) * 100)
        return result

    @staticmethod
    def summarize(verdict: EvaluationVerdict, heuristics: HeuristicResult) -> str:
        passed = verdict.passing_count()
        overall = round(passed / 5 * 100)
        return (
            "Evaluation Summary:\n"
            f"- Overall Score: {overall}% ({passed}/5 criteria passed)\n"
            f"- Data Completeness: {heuristics.data_completeness}%\n"
            f"- Work Experience: {heuristics.work_experience_count} entries\n"
            f"- Education: {heuristics.education_count} entries\n"
            f"- Skills: {heuristics.skills_count} entries\n"
            f"- Quantifiable Metrics: {'Yes' if heuristics.has_quantifiable_metrics else 'No'}\n"
            f"- Go/No-Go: {verdict.go_nogo}\n"
            f"- Rationale: {verdict.rationale}"
        )
