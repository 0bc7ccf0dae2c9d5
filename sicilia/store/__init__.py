"""
Sicilia Store - SQLite persistence for the vocabulary catalog.

This module provides:
- CatalogStore: seeding, tier-filtered reads, learned-flag upserts
- load_seed_records: seed asset loading and validation
"""

from .catalog import CatalogStore, SCHEMA
from .seed import load_seed_records

__all__ = [
    "CatalogStore",
    "SCHEMA",
    "load_seed_records",
]
