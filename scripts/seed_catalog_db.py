#!/usr/bin/env python3
"""Seed a SQL catalog database from a YAML catalog file.

Creates the catalog tables if needed and replaces their contents with the
products from the YAML file, keeping file order as catalog order. Point
``catalog.type: database`` (and DATABASE_URL) at the result to match against it.

Usage:
    # Seed the default SQLite database from the example catalog
    python scripts/seed_catalog_db.py --catalog catalog.example.yaml

    # Custom database
    python scripts/seed_catalog_db.py --catalog catalog.yaml --database-url sqlite:////tmp/catalog.db

    # Use DATABASE_URL from the environment (or .env)
    python scripts/seed_catalog_db.py --catalog catalog.yaml --from-env
"""

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from skumatch.catalog import CatalogUnavailableError, SqlCatalogProvider, YamlCatalogProvider
from skumatch.logging.config import configure_logging

DEFAULT_DATABASE_URL = "sqlite:///./data/catalog.db"


def print_header(title: str):
    """Print a formatted section header."""
    width = 60
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def main():
    """Main entry point for catalog seeding."""
    parser = argparse.ArgumentParser(
        description="Seed a SQL catalog database from a YAML catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=Path("catalog.example.yaml"),
        help="Path to catalog YAML file (default: catalog.example.yaml)",
    )
    parser.add_argument(
        "--database-url",
        default=DEFAULT_DATABASE_URL,
        help=f"SQLAlchemy database URL (default: {DEFAULT_DATABASE_URL})",
    )
    parser.add_argument(
        "--from-env",
        action="store_true",
        help="Take the database URL from DATABASE_URL instead of --database-url",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    load_dotenv()
    configure_logging(level=args.log_level, format_type="key-value", environment="seeding")

    database_url = args.database_url
    if args.from_env:
        database_url = os.environ.get("DATABASE_URL", "")
        if not database_url:
            print("Error: --from-env given but DATABASE_URL is not set", file=sys.stderr)
            return 1

    print_header("SKU Matcher - Catalog Seeding")
    print(f"Catalog file: {args.catalog}")

    provider = SqlCatalogProvider(database_url, create_tables=True)
    print(f"Database: {provider.source}")

    try:
        products = YamlCatalogProvider(args.catalog).load_sync()
        variant_count = sum(len(p.variants) for p in products)
        print(f"\nLoaded {len(products)} products ({variant_count} variants)")

        written = provider.replace_catalog(products)
        print(f"Stored {written} products")

        # Read back to confirm order survived the round trip
        stored = provider.load_sync()
        if [p.sku for p in stored] != [p.sku for p in products]:
            print("Error: stored catalog order does not match the file", file=sys.stderr)
            return 2

    except CatalogUnavailableError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 2
    finally:
        provider.close()

    print("\nDone.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
