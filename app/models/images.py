from __future__ import annotations

from pydantic import BaseModel


class ResolvedImage(BaseModel):
    """A displayable image for one page slot."""

    image_url: str
    alt_text: str


class GeneratedImage(BaseModel):
    image_url: str  # data:image/<fmt>;base64,<payload>
    alt_text: str


class ImageSlot(BaseModel):
    context_tag: str
    hint: str | None = None
