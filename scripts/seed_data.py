#!/usr/bin/env python3
# =============================================================================
# scripts/seed_data.py - Seed Initial Catalog Data
# =============================================================================
# Inserts the starter categories and apps. Rows whose slug already exists are
# skipped, so the script can be run repeatedly.
#
# Usage:
#   python scripts/seed_data.py
#
# Prerequisites:
#   - Schema installed (see scripts/setup_database.py)
#   - SUPABASE_SERVICE_KEY in .env (seeding bypasses RLS)
# =============================================================================

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from app.auth.models import SERVICE_USER
from app.exceptions import AppNotFoundError
from core.models.app import AppCreate, AppStatus
from core.models.category import CategoryCreate
from core.services import AppService, CategoryService
from lib.supabase_client import create_service_client
from lib.utils import slugify

logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
logger = logging.getLogger("seed_data")

CATEGORIES = [
    {
        "name": "Productivity",
        "description": "Apps to help you get things done",
        "icon": "productivity",
    },
    {
        "name": "Content",
        "description": "Content creation and management apps",
        "icon": "content",
    },
    {
        "name": "Marketing",
        "description": "Marketing and growth tools",
        "icon": "marketing",
    },
]

APPS = [
    {
        "name": "A Little Better",
        "short_description": "Small daily improvements that add up",
        "description": "Track the small habits that make each day a little better than the last.",
        "app_url": "https://a-little-better.com",
        "category": "productivity",
    },
    {
        "name": "Blog",
        "short_description": "Write and publish posts",
        "description": "A simple blog for writing, publishing and sharing posts.",
        "app_url": "https://blogs.a-little-better.com",
        "category": "content",
    },
]

DEVELOPER = "A Little Better Team"


def seed_categories(client) -> dict[str, str]:
    """Create missing categories. Returns slug -> id for all seeded ones."""
    ids = {}
    for entry in CATEGORIES:
        slug = slugify(entry["name"])
        row = CategoryService.get_category(client, "slug", slug)
        if row is None:
            row = CategoryService.create_category(client, SERVICE_USER, CategoryCreate(**entry))
            logger.info(f"Created category: {slug}")
        else:
            logger.info(f"Category exists, skipping: {slug}")
        ids[slug] = str(row["id"])
    return ids


def seed_apps(client, category_ids: dict[str, str]) -> int:
    """Create missing apps. Returns the number created."""
    created = 0
    for entry in APPS:
        slug = slugify(entry["name"])
        try:
            AppService.get_visible_app(client, slug, SERVICE_USER)
            logger.info(f"App exists, skipping: {slug}")
            continue
        except AppNotFoundError:
            pass

        fields = {key: value for key, value in entry.items() if key != "category"}
        payload = AppCreate(
            **fields,
            category_id=category_ids.get(entry["category"]),
            developer=DEVELOPER,
            version="1.0.0",
            status=AppStatus.PUBLISHED,
            featured=True,
        )
        AppService.create_app(client, SERVICE_USER, payload)
        logger.info(f"Created app: {slug}")
        created += 1
    return created


def main() -> int:
    """Seed categories, then apps."""
    print("=" * 60)
    print("App Catalog - Seed Data")
    print("=" * 60)

    client = create_service_client()
    category_ids = seed_categories(client)
    created = seed_apps(client, category_ids)

    print(f"Seeded {len(category_ids)} categories and {created} new apps.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
