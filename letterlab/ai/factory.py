from letterlab.ai.config import AIConfig, load_ai_config
from letterlab.ai.types import CompletionClient

from letterlab.ai.providers.openai_provider import OpenAIProvider


def get_ai_client(config: AIConfig | None = None) -> CompletionClient:
    cfg = config or load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(cfg)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
