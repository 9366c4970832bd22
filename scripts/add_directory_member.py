"""Utility script to add a customer, merchant or agent to a geofence directory."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from delivery_admin.domain.entities import RecipientCategory
from delivery_admin.infrastructure.database import SessionLocal, initialize_database
from delivery_admin.infrastructure.repositories import DirectoryRepository


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the directory entry."""

    parser = argparse.ArgumentParser(
        description="Add a member to one of the push notification audiences.",
    )
    parser.add_argument(
        "category",
        choices=[category.value for category in RecipientCategory],
        help="Audience the member belongs to",
    )
    parser.add_argument("member_id", help="Identifier used for push tokens and websockets")
    parser.add_argument("--geofence", required=True, help="Geofence the member belongs to")
    parser.add_argument("--name", default=None, help="Display name (optional)")
    return parser.parse_args()


def main() -> None:
    """Store the member described by the command line arguments."""

    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        member = DirectoryRepository(session, RecipientCategory(args.category)).add(
            args.member_id, geofence_id=args.geofence, name=args.name
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the directory member: {exc}") from exc
    else:
        print(
            "Directory member stored:\n"
            f"  Category: {args.category}\n"
            f"  ID: {member.id}\n"
            f"  Geofence: {member.geofence_id}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
