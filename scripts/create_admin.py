#!/usr/bin/env python3
"""Create the first admin account.

Admins can only be registered by another admin through the API, so a fresh
database needs one created out of band.

Usage:
    python scripts/create_admin.py --username admin --email admin@example.com --password '...'

    # Against another database:
    DATABASE_URL=sqlite:///./other.db python scripts/create_admin.py ...
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pocketbook.database import SessionLocal, init_db  # noqa: E402
from pocketbook.services.auth import bootstrap_admin  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    init_db()
    session = SessionLocal()
    try:
        admin = bootstrap_admin(session, args.username, args.email, args.password)
    finally:
        session.close()

    if admin is None:
        print("No admin created: an admin already exists or the username/email is taken.")
        return 1
    print(f"Created admin '{args.username}' <{args.email}>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
