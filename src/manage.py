"""Moderation database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_databases():
    """Create the moderation database schema."""
    from moderation.domain import moderation
    from moderation.utils.db import setup_db

    print("Initializing moderation domain...")
    moderation.init()
    print("Creating moderation database schema...")
    setup_db(moderation)
    print("Done.")


def drop_databases():
    """Drop the moderation database schema."""
    from moderation.domain import moderation
    from moderation.utils.db import drop_db

    print("Initializing moderation domain...")
    moderation.init()
    print("Dropping moderation database schema...")
    drop_db(moderation)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="Moderation database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
