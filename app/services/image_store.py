"""Persistence helpers for cached page images.

One row per ``context_tag``. Writes go through a single
``INSERT ... ON CONFLICT (context_tag) DO UPDATE`` statement so concurrent
writers converge on the last value instead of duplicating the tag.
"""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from app.db.models import ImageRecord

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def fetch_image(session: Session, context_tag: str) -> tuple[str, str | None] | None:
    """Return ``(image_url, alt_text)`` for *context_tag* or ``None``."""

    stmt = (
        select(ImageRecord.image_url, ImageRecord.alt_text)
        .where(ImageRecord.context_tag == context_tag)
        .limit(1)
    )
    row = session.execute(stmt).first()
    if row is None:
        return None
    return row.image_url, row.alt_text


def upsert_image(session: Session, context_tag: str, image_url: str, alt_text: str | None) -> None:
    """Insert or overwrite the image stored for *context_tag* and commit."""

    dialect = session.get_bind().dialect.name
    insert = _UPSERT_DIALECTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"Upsert is not supported on the '{dialect}' dialect")

    stmt = insert(ImageRecord).values(context_tag=context_tag, image_url=image_url, alt_text=alt_text)
    stmt = stmt.on_conflict_do_update(
        index_elements=[ImageRecord.context_tag],
        set_={
            "image_url": stmt.excluded.image_url,
            "alt_text": stmt.excluded.alt_text,
            "updated_at": func.now(),
        },
    )
    session.execute(stmt)
    session.commit()
    logger.debug("Stored image for context_tag=%s", context_tag)
