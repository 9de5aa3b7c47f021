"""Storefront database management CLI.

Creates and drops the SQL schema for every SQL-backed provider configured
for the active PROTEAN_ENV. In-memory providers need nothing.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db
    PROTEAN_ENV=production python src/manage.py drop-db
"""

import argparse
import sys

import structlog

from storefront.domain import storefront
from storefront.utils.db import drop_db, setup_db
from storefront.utils.logging import configure_logging

logger = structlog.get_logger(__name__)


def setup_databases():
    storefront.init()
    providers = setup_db(storefront)
    if not providers:
        logger.warning("no_sql_providers", hint="set PROTEAN_ENV to an environment with a SQL database")
    for name in providers:
        logger.info("schema_created", provider=name)


def drop_databases():
    storefront.init()
    for name in drop_db(storefront):
        logger.info("schema_dropped", provider=name)


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()
    configure_logging()

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
