"""Order Alerts database management CLI.

Creates or drops the relational schema backing the device registry. The
default memory provider needs neither.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from alerts.domain import alerts
    from alerts.utils.db import setup_db

    print("Initializing alerts domain...")
    alerts.init()
    print("Creating alerts database schema...")
    created = setup_db(alerts)
    print(f"  {created} relational provider(s) ready.")


def drop_database():
    from alerts.domain import alerts
    from alerts.utils.db import drop_db

    print("Initializing alerts domain...")
    alerts.init()
    print("Dropping alerts database schema...")
    dropped = drop_db(alerts)
    print(f"  {dropped} relational provider(s) dropped.")


def main():
    parser = argparse.ArgumentParser(description="Order Alerts database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
