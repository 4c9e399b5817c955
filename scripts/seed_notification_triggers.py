"""Utility script to install the default notification triggers of a tenant."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notifier.application.use_cases.triggers import seed_default_triggers
from notifier.domain.errors import ValidationError
from notifier.infrastructure.database import SessionLocal, initialize_database


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for trigger seeding."""

    parser = argparse.ArgumentParser(
        description="Seed the default notification triggers of a tenant.",
    )
    parser.add_argument("--tenant-id", type=int, required=True, help="Tenant receiving the triggers")
    parser.add_argument(
        "--created-by",
        type=int,
        required=True,
        help="User recorded as the author of the seeded triggers",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Seed the triggers using the provided command line arguments."""

    args = parse_args(argv)

    initialize_database()

    session = SessionLocal()
    try:
        created = seed_default_triggers(
            session,
            tenant_id=args.tenant_id,
            created_by=args.created_by,
        )
    except ValidationError as exc:
        session.rollback()
        raise SystemExit(f"Could not seed the triggers: {'; '.join(exc.errors) or exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save the triggers: {exc}") from exc
    else:
        if not created:
            print(f"Tenant {args.tenant_id} already has every default trigger.")
        else:
            print(f"Seeded {len(created)} notification triggers for tenant {args.tenant_id}:")
            for trigger in created:
                print(f"  {trigger.trigger_module}.{trigger.trigger_event}: {trigger.trigger_name}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
