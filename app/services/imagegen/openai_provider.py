from __future__ import annotations

import base64
import binascii
import io
import logging

from openai import OpenAI
from PIL import Image, UnidentifiedImageError

from app.models import GeneratedImage

from .base import ImageGenerationError, ImageProvider

logger = logging.getLogger(__name__)


class OpenAIImageProvider(ImageProvider):
    name = "openai"

    def __init__(
        self,
        *,
        model: str = "gpt-image-1",
        size: str = "1536x1024",
        api_key: str | None = None,
        client: OpenAI | None = None,
    ) -> None:
        self._client = client or OpenAI(api_key=api_key)
        self._model = model
        self._size = size

    def generate(self, prompt: str, *, alt_text: str) -> GeneratedImage:
        params = {"model": self._model, "prompt": prompt, "size": self._size, "n": 1}
        # dall-e models default to hosted URLs; gpt-image models always return base64
        if self._model.startswith("dall-e"):
            params["response_format"] = "b64_json"

        response = self._client.images.generate(**params)
        data = response.data or []
        payload = data[0].b64_json if data else None
        if not payload:
            raise ImageGenerationError("Image generation failed to produce a valid data URI.")

        mime_type = _sniff_mime_type(payload)
        logger.debug("Generated %s image with %s (%d base64 chars)", mime_type, self._model, len(payload))
        return GeneratedImage(image_url=f"data:{mime_type};base64,{payload}", alt_text=alt_text)


# ------------------------------------------------------------------
# Helper functions
# ------------------------------------------------------------------

def _sniff_mime_type(payload: str) -> str:
    """Return the MIME type of a base64 image payload using Pillow."""

    try:
        raw = base64.b64decode(payload, validate=True)
        with Image.open(io.BytesIO(raw)) as img:
            return Image.MIME.get(img.format or "", "image/png")
    except (binascii.Error, ValueError, UnidentifiedImageError) as exc:
        raise ImageGenerationError(f"Provider returned an undecodable image payload: {exc}") from exc
