#!/usr/bin/env python3
"""
init_catalog.py - Create and seed the Sicilia catalog database.

Creates the schema, runs the one-shot seed (no-op if already seeded)
and prints catalog statistics for both tiers.

Usage:
  python scripts/init_catalog.py
  python scripts/init_catalog.py --db data/sicilia.db --seed sicilia/data/seed_catalog.json
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv
load_dotenv(PROJECT_ROOT / ".env")

from sicilia.config import Settings
from sicilia.errors import StorageError
from sicilia.store import CatalogStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(
        description="Create and seed the Sicilia catalog database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--db", type=Path, default=settings.db_path,
                        help=f"SQLite database path (default: {settings.db_path})")
    parser.add_argument("--seed", type=Path, default=settings.seed_path,
                        help="JSON seed asset")
    args = parser.parse_args()

    store = CatalogStore(args.db, seed_path=args.seed)

    logger.info(f"Initializing catalog at {args.db}...")
    try:
        seeded = store.initialize()
    except StorageError as e:
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)

    if not seeded:
        logger.error("Seeding failed; the catalog is empty. Fix the seed asset and re-run.")
        sys.exit(1)

    free = store.get_stats(includes_premium=False)
    full = store.get_stats(includes_premium=True)

    logger.info("")
    logger.info("=" * 50)
    logger.info("CATALOG READY")
    logger.info("=" * 50)
    logger.info(f"Free tier: {free['total_cards']} cards, {free['learned']} learned ({free['completion_percent']}%)")
    logger.info(f"Pro tier:  {full['total_cards']} cards, {full['learned']} learned ({full['completion_percent']}%)")


if __name__ == "__main__":
    main()
