from sqlalchemy import func, select

from app.db.models import ImageRecord
from app.services.image_store import fetch_image, upsert_image


def test_fetch_missing_tag_returns_none(db):
    assert fetch_image(db, "nope") is None


def test_upsert_inserts_then_overwrites_in_place(db):
    upsert_image(db, "about_page_generic_promo", "data:image/png;base64,AAAA", "first")
    upsert_image(db, "about_page_generic_promo", "data:image/png;base64,BBBB", "second")

    count = db.execute(select(func.count()).select_from(ImageRecord)).scalar_one()
    assert count == 1
    assert fetch_image(db, "about_page_generic_promo") == ("data:image/png;base64,BBBB", "second")


def test_upsert_keeps_other_tags_separate(db):
    upsert_image(db, "a", "data:image/png;base64,AAAA", None)
    upsert_image(db, "b", "data:image/png;base64,BBBB", "b alt")

    assert fetch_image(db, "a") == ("data:image/png;base64,AAAA", None)
    assert fetch_image(db, "b") == ("data:image/png;base64,BBBB", "b alt")
