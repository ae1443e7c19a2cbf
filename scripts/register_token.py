"""Utility script to register a user's push token in the database."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notifier.application.use_cases.users import register_token
from notifier.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token registration."""

    parser = argparse.ArgumentParser(
        description="Create or update a user and its push token.",
    )
    parser.add_argument("user_id", help="Identifier of the user")
    parser.add_argument(
        "--token",
        default=None,
        help="FCM registration token. Omit it to clear the stored token.",
    )
    parser.add_argument("--name", default=None, help="Display name for new users")
    parser.add_argument(
        "--role",
        default=None,
        help="Role for new users (for example: customer, owner)",
    )
    return parser.parse_args()


def main() -> None:
    """Register the token using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = register_token(
            session,
            user_id=args.user_id,
            token=args.token,
            name=args.name,
            role=args.role,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not register the token: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error saving the user to the database: {exc}") from exc
    else:
        print(
            "Token registered:\n"
            f"  ID: {user.id}\n"
            f"  Role: {user.role}\n"
            f"  Token: {user.fcm_token or '-'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
