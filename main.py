"""
main.py
-------
Command-line entry point for the LightBnB data-access layer.

Commands:
    init-db   Create the schema (tables and indexes) if missing.
    search    Run a property search and print one line per listing.
"""

import argparse
import sys
from typing import Optional, Sequence

from config import DEFAULT_RESULT_LIMIT
from db.connection import Database
from db.init_db import create_tables
from repositories.property_query import PropertyFilters
from services.lightbnb_service import LightBnBService
from utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lightbnb", description="LightBnB database tools")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="create the database schema")

    search = commands.add_parser("search", help="search properties")
    search.add_argument("--city")
    search.add_argument("--owner-id", type=int)
    search.add_argument("--min-price", type=float, help="minimum price per night")
    search.add_argument("--max-price", type=float, help="maximum price per night")
    search.add_argument("--min-rating", type=float)
    search.add_argument("--limit", type=int, default=DEFAULT_RESULT_LIMIT)
    return parser


def run_search(service: LightBnBService, args: argparse.Namespace) -> int:
    """Print matching listings. Returns the process exit status."""
    filters = PropertyFilters(
        city=args.city,
        owner_id=args.owner_id,
        minimum_price_per_night=args.min_price,
        maximum_price_per_night=args.max_price,
        minimum_rating=args.min_rating,
    )
    try:
        result = service.get_all_properties(filters, args.limit)
    except ValueError as e:
        print(f"Invalid search: {e}", file=sys.stderr)
        return 2
    if not result.ok:
        print(f"Search failed: {result.error}", file=sys.stderr)
        return 1
    if not result.value:
        print("No properties found.")
        return 0
    for listing in result.value:
        print(listing)
    return 0


def main(argv: Optional[Sequence[str]] = None, db: Optional[Database] = None) -> int:
    """
    Parse arguments and run the command.

    A `db` passed in belongs to the caller and is left open; otherwise a
    Database is created here and closed on the way out.
    """
    args = build_parser().parse_args(argv)
    owns_db = db is None
    database = Database() if owns_db else db

    database.init_pool()
    try:
        if args.command == "init-db":
            create_tables(database)
            return 0
        return run_search(LightBnBService(database), args)
    finally:
        if owns_db:
            database.close_pool()


if __name__ == "__main__":
    sys.exit(main())
