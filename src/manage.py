"""Storefront database management CLI.

Provides commands to create and drop the ordering schema and to register
the store that checkout orders are attached to.

Usage:
    python src/manage.py setup-db                           # Create all tables
    python src/manage.py drop-db                            # Drop all tables
    python src/manage.py seed-store --slug badminton --name OfCourt
"""

import argparse
import sys


def setup_databases():
    """Create the ordering database schema."""
    from ordering.domain import ordering
    from ordering.utils.db import setup_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Creating ordering database schema...")
    setup_db(ordering)
    print("Done.")


def drop_databases():
    """Drop the ordering database schema."""
    from ordering.domain import ordering
    from ordering.utils.db import drop_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Dropping ordering database schema...")
    drop_db(ordering)
    print("Done.")


def seed_store(slug, name=None):
    """Register the store checkout orders are attached to. Returns its id."""
    from ordering.domain import ordering
    from ordering.store.registration import RegisterStore
    from protean.utils.globals import current_domain

    ordering.init()
    with ordering.domain_context():
        store_id = current_domain.process(RegisterStore(slug=slug, name=name), asynchronous=False)
    print(f"Store {slug!r} registered with id {store_id}.")
    return store_id


def main(argv=None):
    from shared.config import Settings

    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-store", help="Register the checkout store")
    seed_parser.add_argument("--slug", default=settings.store_slug, help="Store slug (default: STORE_SLUG)")
    seed_parser.add_argument("--name", default=settings.store_name, help="Display name (default: STORE_NAME)")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    elif args.command == "seed-store":
        seed_store(args.slug, args.name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
