"""Cache-aside lookup of AI generated page imagery.

Pages ask for an image by a stable context tag plus a short hint describing
what the picture should show. The stored image is returned when it is a
valid inline data URI; otherwise the hint is sent to the image provider and
the result is upserted under the tag.

``resolve`` never raises. ``None`` means "no image available" and callers
substitute a placeholder. Concurrent first-time resolutions of one tag may
each call the provider; the unique key on ``context_tag`` makes the last
write win.
"""
from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import Callable, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.database import SessionLocal
from app.models import GeneratedImage, ImageSlot, ResolvedImage
from app.services.image_store import fetch_image, upsert_image
from app.services.imagegen import generate_image

logger = logging.getLogger(__name__)

DEFAULT_ALT_TEXT = "Apexora promotional image"

_DATA_URI_RE = re.compile(r"^data:image/[a-z0-9.+-]+;base64,(?P<payload>[A-Za-z0-9+/]+={0,2})\Z", re.IGNORECASE)


def is_data_uri(value: str | None) -> bool:
    """True when *value* is a well-formed ``data:image/<type>;base64,<payload>`` URI."""

    if not value:
        return False
    match = _DATA_URI_RE.match(value)
    if match is None:
        return False
    try:
        base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


class ImageResolver:
    """Resolve context tags to images, generating and caching on miss."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        generator: Callable[[str], GeneratedImage] = generate_image,
    ) -> None:
        self._session_factory = session_factory
        self._generator = generator

    def resolve(self, context_tag: str, hint: str | None = None) -> ResolvedImage | None:
        """Return the image for *context_tag*, or ``None`` if none is available.

        Without a *hint* only the stored value is consulted; nothing is
        generated on a miss.
        """

        with self._session_factory() as session:
            try:
                stored = fetch_image(session, context_tag)
            except SQLAlchemyError:
                logger.exception("Database error fetching image with tag '%s'", context_tag)
                return None

            if stored is not None:
                image_url, alt_text = stored
                if is_data_uri(image_url):
                    return ResolvedImage(image_url=image_url, alt_text=alt_text or DEFAULT_ALT_TEXT)
                logger.warning(
                    "Stored image for tag '%s' is not a data URI (%.40s...); regenerating",
                    context_tag,
                    image_url,
                )

            if not hint:
                return None

            generated = self._generate(context_tag, hint)
            if generated is None:
                return None

            try:
                upsert_image(session, context_tag, generated.image_url, generated.alt_text)
            except (SQLAlchemyError, NotImplementedError):
                session.rollback()
                logger.exception("Failed to store generated image for tag '%s'", context_tag)

            return ResolvedImage(image_url=generated.image_url, alt_text=generated.alt_text or DEFAULT_ALT_TEXT)

    def resolve_many(self, slots: Iterable[ImageSlot]) -> dict[str, ResolvedImage | None]:
        """Resolve several slots for one page, keyed by context tag."""

        return {slot.context_tag: self.resolve(slot.context_tag, slot.hint) for slot in slots}

    def _generate(self, context_tag: str, hint: str) -> GeneratedImage | None:
        try:
            generated = self._generator(hint)
        except Exception:  # provider SDK errors vary by backend
            logger.exception("Image generation failed for tag '%s'", context_tag)
            return None

        if generated is None or not is_data_uri(generated.image_url):
            logger.error("Image generation for tag '%s' returned no usable payload", context_tag)
            return None
        logger.info("Generated new image for tag '%s'", context_tag)
        return generated


# Singleton instance
image_resolver = ImageResolver()


def get_image_resolver() -> ImageResolver:
    return image_resolver
