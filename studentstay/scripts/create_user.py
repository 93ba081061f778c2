"""Create a student account for StudentStay.

Usage:
    python -m studentstay.scripts.create_user --name "Ana Silva" --email ana@example.com --password <password>
"""

from __future__ import annotations

import argparse
import sys

from studentstay.db.session import SessionLocal
from studentstay.services.auth import create_user, get_user_by_email


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a StudentStay user")
    parser.add_argument("--name", required=True, help="Display name")
    parser.add_argument("--email", required=True, help="Login email")
    parser.add_argument("--password", required=True, help="Password for the new user")
    args = parser.parse_args()

    if not args.name.strip():
        print("Error: name cannot be empty.")
        sys.exit(1)

    db = SessionLocal()
    try:
        if get_user_by_email(db, args.email) is not None:
            print(f"User '{args.email}' already exists.")
            sys.exit(1)

        user = create_user(db, args.name, args.email, args.password)
        print(f"User '{user.email}' created successfully (id={user.id}).")
    finally:
        db.close()


if __name__ == "__main__":
    main()
