from __future__ import annotations

from app.models import GeneratedImage

from .base import ImageGenerationError, ImageProvider
from .registry import get_image_provider

__all__ = [
    "ImageGenerationError",
    "ImageProvider",
    "build_image_prompt",
    "generate_image",
    "get_image_provider",
]

_PROMPT_TEMPLATE = (
    "Generate a photorealistic image for a modern, sleek corporate website for a financial "
    "technology company (Forex, Trading). The image should be professional and visually "
    "appealing, suitable for a section about: {hint}. Do not include any text in the image."
)


def build_image_prompt(hint: str) -> str:
    return _PROMPT_TEMPLATE.format(hint=hint.strip())


def generate_image(hint: str, *, provider: ImageProvider | None = None) -> GeneratedImage:
    """Facade for the configured image provider; the hint doubles as alt text."""

    provider = provider or get_image_provider()
    return provider.generate(build_image_prompt(hint), alt_text=hint)
