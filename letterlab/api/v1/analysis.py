from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from letterlab.api.deps import get_analysis_service, require_api_key
from letterlab.core.rate_limit import rate_limit
from letterlab.schemas.analysis import AnalysisRequest, DocumentType
from letterlab.services.analysis_service import LLMAnalysisService

router = APIRouter()


class AnalyzeDocumentRequest(BaseModel):
    raw_text: str = Field(default="", max_length=200_000)
    document_type: DocumentType = DocumentType.RESUME


class TemplateRequest(BaseModel):
    raw_text: str = Field(default="", max_length=50_000)


@router.post("/analysis", dependencies=[Depends(require_api_key)])
@rate_limit()
async def analyze_document(
    request: Request,
    payload: AnalyzeDocumentRequest,
    service: LLMAnalysisService = Depends(get_analysis_service),
):
    _ = request
    result = await service.analyze(
        AnalysisRequest(raw_text=payload.raw_text, document_type=payload.document_type)
    )
    return result.model_dump(mode="json", by_alias=True)


@router.post("/analysis/template", dependencies=[Depends(require_api_key)])
@rate_limit()
async def extract_template(
    request: Request,
    payload: TemplateRequest,
    service: LLMAnalysisService = Depends(get_analysis_service),
):
    _ = request
    result = await service.extract_template(payload.raw_text)
    return result.model_dump(mode="json", by_alias=True)
