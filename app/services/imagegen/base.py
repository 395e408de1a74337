from __future__ import annotations

from abc import ABC, abstractmethod

from app.models import GeneratedImage


class ImageGenerationError(RuntimeError):
    """Raised when a provider fails to produce a usable image payload."""


class ImageProvider(ABC):
    """Abstract interface for a text-to-image provider."""

    name: str = "abstract"

    @abstractmethod
    def generate(self, prompt: str, *, alt_text: str) -> GeneratedImage:
        """Generate a single image for *prompt*.

        Returns
        -------
        GeneratedImage
            ``image_url`` is an inline ``data:image/...;base64,`` URI.
        """
