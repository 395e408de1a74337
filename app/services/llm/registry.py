from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

from app.config import Settings, get_settings

from .base import LLMProvider
from .openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)


def _openai(settings: Settings) -> LLMProvider:
    return OpenAIProvider(
        model=settings.openai_model,
        api_key=settings.openai_api_key,
        temperature=settings.openai_temperature,
        top_p=settings.openai_top_p,
        max_tokens=settings.openai_max_tokens,
    )


_FACTORIES: dict[str, Callable[[Settings], LLMProvider]] = {
    "openai": _openai,
}


@lru_cache()
def get_provider(name: str | None = None) -> LLMProvider:
    """Build the chat provider named *name*, defaulting to ``LLM_PROVIDER``."""

    settings = get_settings()
    key = (name or settings.llm_provider).lower()
    factory = _FACTORIES.get(key)
    if factory is None:
        raise ValueError(f"Unsupported LLM provider '{key}' (known: {', '.join(sorted(_FACTORIES))})")
    provider = factory(settings)
    logger.info("Using %s chat provider with model %s", key, provider.model)
    return provider
