"""Macaroon Market database management CLI.

Creates, drops and checks the storefront tables and seeds the default
products. The database itself must already exist.

Usage:
    python src/manage.py setup-db    # Create all tables
    python src/manage.py drop-db     # Drop all tables
    python src/manage.py verify-db   # Check tables and columns against the models
    python src/manage.py seed        # Insert default products into an empty catalogue
"""

import argparse
import sys

from catalogue.product.defaults import DEFAULT_PRODUCTS
from catalogue.product.store import CatalogStore
from shared.config import load_settings
from shared.exceptions import PersistenceError
from shared.store import Store
from shared.utils.db import drop_db, setup_db, verify_schema
from shared.utils.logging import configure_logging


def setup_database(store: Store):
    print("Creating database schema...")
    setup_db(store)
    print("Done.")


def drop_database(store: Store):
    print("Dropping database schema...")
    drop_db(store)
    print("Done.")


def verify_database(store: Store):
    print("Verifying database schema...")
    verify_schema(store)
    print("  Schema matches.")


def seed_catalogue(store: Store):
    inserted = CatalogStore(store).seed_if_empty(DEFAULT_PRODUCTS)
    if inserted:
        print(f"Inserted {inserted} default products.")
    else:
        print("Catalogue already has products; nothing inserted.")


COMMANDS = {
    "setup-db": (setup_database, "Create all database tables"),
    "drop-db": (drop_database, "Drop all database tables"),
    "verify-db": (verify_database, "Check the live schema against the models"),
    "seed": (seed_catalogue, "Insert default products if the catalogue is empty"),
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Macaroon Market database management")
    parser.add_argument("--database-url", help="Override DATABASE_URL for this run")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, (_, help_text) in COMMANDS.items():
        subparsers.add_parser(name, help=help_text)

    args = parser.parse_args(argv)

    settings = load_settings()
    store = Store(args.database_url or settings.database_url, echo=settings.sql_echo)

    command, _ = COMMANDS[args.command]
    try:
        command(store)
    except PersistenceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        store.dispose()
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(main())
