#!/usr/bin/env python
"""Script to create a user and empty wallet for an existing Firebase Auth account."""
from __future__ import annotations

import argparse
import sys

from app.db.database import SessionLocal, init_db
from app.services import accounts


def main() -> None:
    parser = argparse.ArgumentParser(description="Create an Apexora user")
    parser.add_argument("--firebase_uid", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--username", required=True)
    args = parser.parse_args()

    init_db()
    with SessionLocal() as db:
        result = accounts.create_user(
            db,
            firebase_uid=args.firebase_uid,
            email=args.email,
            username=args.username,
        )
        if not result.success:
            print(f"Failed: {result.message}", file=sys.stderr)
            sys.exit(1)
        user = accounts.get_user_by_firebase_uid(db, args.firebase_uid)

    print("Created user:")
    print(user.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
