from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from letterlab.api.deps import get_evaluation_judge, require_api_key
from letterlab.core.config import settings
from letterlab.core.rate_limit import rate_limit
from letterlab.schemas.analysis import DocumentType
from letterlab.services.evaluation_service import EvaluationJudge

router = APIRouter()


class EvaluationRequest(BaseModel):
    structured_data: dict[str, Any] = Field(default_factory=dict)
    original_text: str = ""
    document_type: DocumentType = DocumentType.RESUME
    has_unified_work_history: bool = False
    has_template: bool = False


class HeuristicsRequest(BaseModel):
    structured_data: dict[str, Any] = Field(default_factory=dict)


@router.post("/evaluation", dependencies=[Depends(require_api_key)])
@rate_limit(settings.evaluation_rate_limit)
async def evaluate(
    request: Request,
    payload: EvaluationRequest,
    judge: EvaluationJudge = Depends(get_evaluation_judge),
):
    _ = request
    verdict = await judge.score(
        payload.structured_data,
        payload.original_text,
        payload.document_type.value,
        has_unified_work_history=payload.has_unified_work_history,
        has_template=payload.has_template,
    )
    heuristics = EvaluationJudge.run_heuristics(payload.structured_data)
    return {
        "verdict": verdict.model_dump(),
        "heuristics": heuristics.model_dump(),
        "summary": EvaluationJudge.summarize(verdict, heuristics),
    }


@router.post("/evaluation/heuristics", dependencies=[Depends(require_api_key)])
async def heuristics(payload: HeuristicsRequest):
    return EvaluationJudge.run_heuristics(payload.structured_data).model_dump()
