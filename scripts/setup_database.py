#!/usr/bin/env python3
# =============================================================================
# scripts/setup_database.py - Database Setup Check
# =============================================================================
# Checks that the catalog tables exist in the configured Supabase project.
# Tables can't be created through the REST API, so when they are missing this
# prints the schema file to run in the Supabase SQL editor.
#
# Usage:
#   python scripts/setup_database.py
#
# Prerequisites:
#   - SUPABASE_URL / SUPABASE_ANON_KEY / SUPABASE_SERVICE_KEY in .env
# =============================================================================

import logging
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from lib.supabase_client import SupabaseClientError, create_service_client, execute_query

logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
logger = logging.getLogger("setup_database")

SCHEMA_FILE = Path(__file__).with_name("schema.sql")
TABLES = ("app_categories", "apps", "app_ratings")


def missing_tables(client) -> list[str]:
    """Return the catalog tables the project doesn't have yet."""
    missing = []
    for table in TABLES:
        try:
            execute_query(
                client.table(table).select("id").limit(1),
                code="TABLE_CHECK_FAILED",
                action=f"read {table}",
            )
        except SupabaseClientError as e:
            logger.debug(f"{table}: {e}")
            missing.append(table)
    return missing


def main() -> int:
    """Report whether the schema is installed."""
    print("=" * 60)
    print("App Catalog - Database Setup")
    print("=" * 60)

    client = create_service_client()
    missing = missing_tables(client)

    if not missing:
        print("All catalog tables exist. The database is ready.")
        return 0

    print(f"Missing tables: {', '.join(missing)}")
    print()
    print("Run this file in the Supabase SQL editor, then re-run this script:")
    print(f"  {SCHEMA_FILE}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
