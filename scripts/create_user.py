"""Utility script to create a user in the database."""

from __future__ import annotations

import argparse
from getpass import getpass

from life_agent.application.use_cases.users import create_user
from life_agent.config import get_settings
from life_agent.domain.errors import StoreError
from life_agent.infrastructure.database import Database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(description="Create a Life Agent user.")
    parser.add_argument("--name", default="Admin", help="Display name (default: Admin)")
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Login email (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted interactively when omitted.",
    )
    parser.add_argument(
        "--inactive",
        action="store_true",
        help="Create the user as inactive.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("No password was provided.")

    database = Database.from_settings(get_settings())
    database.initialize()

    session = database.session()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            is_active=not args.inactive,
        )
    except ValueError as exc:
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except StoreError as exc:
        raise SystemExit(f"Could not save the user: {exc.message}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}"
        )
    finally:
        session.close()
        database.dispose()


if __name__ == "__main__":
    main()
