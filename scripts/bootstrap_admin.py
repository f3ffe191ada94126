#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from ecommerce_portal.core.config import IS_PROD  # noqa: E402
from ecommerce_portal.core.database import SessionLocal  # noqa: E402
from ecommerce_portal.core.errors import DomainError  # noqa: E402
from ecommerce_portal.services.admins import ensure_initial_admin  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the first portal admin.")
    parser.add_argument("--email", required=True, help="Admin email")
    parser.add_argument("--password", required=True, help="Admin password")
    parser.add_argument("--first-name", default="Portal", help="Admin first name")
    parser.add_argument("--last-name", default="Admin", help="Admin last name")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Allow running against a production environment",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    if IS_PROD and not args.force:
        print("Refusing to bootstrap an admin in production without --force.")
        return 1

    db = SessionLocal()
    try:
        admin, created = ensure_initial_admin(
            db,
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    except DomainError as exc:
        print(exc.message)
        return 1
    finally:
        db.close()

    action = "created" if created else "already exists"
    print(f"Admin {action}: id={admin.id} email={args.email}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
