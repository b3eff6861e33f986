#!/usr/bin/env python3
"""
Create an ADMIN account.

The API never hands out the ADMIN role: registration always creates a
USER. Admins are provisioned here, directly against the database.

USAGE:
    python scripts/create_admin.py --name "Site Admin" \\
        --email admin@example.com --password 's3cret-pass'

    # Password can also come from the environment
    ADMIN_PASSWORD='s3cret-pass' python scripts/create_admin.py \\
        --name "Site Admin" --email admin@example.com
"""

import argparse
import os
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pydantic import ValidationError

from bookreview.database import SessionLocal
from bookreview.exceptions import AppError
from bookreview.schemas import UserCreate
from bookreview.services import AuthService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an ADMIN user")
    parser.add_argument("--name", required=True, help="display name (2-100 characters)")
    parser.add_argument("--email", required=True, help="login email")
    parser.add_argument(
        "--password",
        default=os.environ.get("ADMIN_PASSWORD"),
        help="password (6-72 characters); defaults to $ADMIN_PASSWORD",
    )
    args = parser.parse_args(argv)
    if not args.password:
        parser.error("--password is required (or set ADMIN_PASSWORD)")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        # Same field rules as /auth/register
        data = UserCreate(name=args.name, email=args.email, password=args.password)
    except ValidationError as e:
        print(f"Invalid input:\n{e}", file=sys.stderr)
        return 2

    db = SessionLocal()
    try:
        admin = AuthService(db).create_admin(data.name, data.email, data.password)
    except AppError as e:
        print(f"Could not create admin: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created ADMIN {admin.email} (id: {admin.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
