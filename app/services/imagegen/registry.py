from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

from app.config import Settings, get_settings

from .base import ImageProvider
from .openai_provider import OpenAIImageProvider

logger = logging.getLogger(__name__)


def _openai(settings: Settings) -> ImageProvider:
    return OpenAIImageProvider(
        model=settings.openai_image_model,
        size=settings.openai_image_size,
        api_key=settings.openai_api_key,
    )


_FACTORIES: dict[str, Callable[[Settings], ImageProvider]] = {
    "openai": _openai,
}


@lru_cache()
def get_image_provider(name: str | None = None) -> ImageProvider:
    """Build the image provider named *name*, defaulting to ``IMAGE_PROVIDER``."""

    settings = get_settings()
    key = (name or settings.image_provider).lower()
    factory = _FACTORIES.get(key)
    if factory is None:
        raise ValueError(f"Unsupported image provider '{key}' (known: {', '.join(sorted(_FACTORIES))})")
    logger.info("Using %s image provider", key)
    return factory(settings)
