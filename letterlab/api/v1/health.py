from fastapi import APIRouter

from letterlab import __version__
from letterlab.ai.config import load_ai_config

router = APIRouter()


@router.get("/health", summary="Health Check", description="Liveness plus the configured completion model.")
async def health_check():
    config = load_ai_config()
    return {
        "status": "healthy",
        "version": __version__,
        "provider": config.provider,
        "model": config.model,
        "llm_configured": bool(config.api_key),
    }
