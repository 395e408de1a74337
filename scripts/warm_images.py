#!/usr/bin/env python
"""Resolve every page image slot so first page views render from cache."""
from __future__ import annotations

import argparse
import logging

from app import catalog
from app.db.database import init_db
from app.services.image_resolver import image_resolver


def main() -> None:
    parser = argparse.ArgumentParser(description="Pre-generate cached page images")
    parser.add_argument("--page", action="append", help="Only warm the given page (repeatable)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    init_db()

    if args.page:
        slots = [slot for page in args.page for slot in catalog.PAGE_IMAGE_SLOTS.get(page, [])]
    else:
        slots = catalog.all_image_slots()

    missing = [tag for tag, image in image_resolver.resolve_many(slots).items() if image is None]
    print(f"Resolved {len(slots) - len(missing)}/{len(slots)} image slots")
    for tag in missing:
        print(f"  unavailable: {tag}")


if __name__ == "__main__":
    main()
