"""Utility script to create the first administrator of a tenant."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from notifier.application.use_cases.users.create_user import create_user
from notifier.domain.errors import ValidationError
from notifier.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial user for the notification service.",
    )
    parser.add_argument("--tenant-id", type=int, required=True, help="Tenant the user belongs to")
    parser.add_argument(
        "--name",
        default="Administrator",
        help="Full name of the user (default: Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Login email of the user (default: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default="admin",
        help="Role alias assigned to the user (default: admin)",
    )
    parser.add_argument("--department", default=None, help="Department of the user (optional)")
    parser.add_argument(
        "--password",
        default=None,
        help="Password of the user. Prompted for interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password for the new user: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            tenant_id=args.tenant_id,
            name=args.name,
            email=args.email,
            password=password,
            role_alias=args.role,
            department=args.department,
        )
    except ValidationError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {'; '.join(exc.errors) or exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Tenant: {user.tenant_id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role.alias}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
