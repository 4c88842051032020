from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Header, HTTPException, status

from letterlab.ai.config import InvalidConfigurationError
from letterlab.core.security import check_api_key
from letterlab.services.analysis_service import LLMAnalysisService
from letterlab.services.evaluation_service import EvaluationJudge

logger = logging.getLogger(__name__)


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    check_api_key(x_api_key)


@lru_cache(maxsize=1)
def _analysis_service() -> LLMAnalysisService:
    return LLMAnalysisService.from_config()


def get_analysis_service() -> LLMAnalysisService:
    try:
        return _analysis_service()
    except InvalidConfigurationError as exc:
        logger.error("analysis_service_unavailable: %s", exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


def get_evaluation_judge() -> EvaluationJudge:
    return EvaluationJudge(get_analysis_service().orchestrator)
