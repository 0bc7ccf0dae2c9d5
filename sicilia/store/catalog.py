"""
CatalogStore - Vocabulary catalog and learning progress in SQLite.

Owns all persisted state:
- Seed marker (meta table)
- Catalog items (cards table), populated once from the seed asset
- Per-card progress (progress table), created lazily on first toggle
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

from sicilia.config import DEFAULT_DB_PATH, DEFAULT_SEED_PATH
from sicilia.errors import SeedError, StorageError
from sicilia.schemas import (
    CatalogEntry,
    CatalogItem,
    ProgressRecord,
    SeedRecord,
    SEED_MARKER_KEY,
)

from .seed import load_seed_records


logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS meta (
    key TEXT PRIMARY KEY,
    value TEXT
);

CREATE TABLE IF NOT EXISTS cards (
    id INTEGER PRIMARY KEY,
    word TEXT NOT NULL,
    meaning TEXT NOT NULL,
    is_premium INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS progress (
    card_id INTEGER PRIMARY KEY,
    learned INTEGER DEFAULT 0,
    correct INTEGER DEFAULT 0,
    wrong INTEGER DEFAULT 0,
    reps INTEGER DEFAULT 0,
    interval_days INTEGER DEFAULT 0,
    ease REAL DEFAULT 2.5,
    due_at INTEGER              -- epoch ms
);
"""


class CatalogStore:
    """
    Durable storage for the vocabulary catalog and learned flags.

    Every method opens its own connection, so a store can be shared
    between Streamlit script threads. Entitlement is never read here:
    callers pass `includes_premium` explicitly.
    """

    def __init__(
        self,
        db_path: Optional[str | Path] = None,
        seed_path: Optional[str | Path] = None,
        seed_records: Optional[Sequence[SeedRecord]] = None,
    ):
        """
        Initialize the store (does not touch the database yet).

        Args:
            db_path: Path to the SQLite file (default: ~/.sicilia/sicilia.db)
            seed_path: JSON seed asset used on first initialize()
            seed_records: In-memory seed records; take precedence over seed_path
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.seed_path = Path(seed_path) if seed_path else DEFAULT_SEED_PATH
        self._seed_records = list(seed_records) if seed_records is not None else None

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection; sqlite errors surface as StorageError."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as e:
            logger.error(f"Cannot open database {self.db_path}: {e}")
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Storage error on {self.db_path}: {e}")
            raise StorageError(str(e)) from e
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------

    def initialize(self) -> bool:
        """
        Ensure the schema exists and seed the catalog on first run.

        A failed seed is rolled back and logged, not raised: the marker
        stays unset so the next call retries.

        Returns:
            True if the catalog is seeded, False if seeding failed

        Raises:
            StorageError: If the schema cannot be created
        """
        self._ensure_schema()
        if self.is_seeded():
            return True

        try:
            records = self._load_seed()
            self._seed(records)
        except SeedError as e:
            logger.error(f"Seeding failed: {e}")
            return False

        logger.info(f"Seeded catalog with {len(records)} cards")
        return True

    def _ensure_schema(self):
        """Create tables if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create data directory {self.db_path.parent}: {e}")
            raise StorageError(f"Cannot create data directory {self.db_path.parent}: {e}") from e

        with self._connect() as conn:
            conn.execute("PRAGMA journal_mode = WAL")
            conn.executescript(SCHEMA)
            conn.commit()

    def _load_seed(self) -> list[SeedRecord]:
        if self._seed_records is not None:
            return self._seed_records
        return load_seed_records(self.seed_path)

    def _seed(self, records: Sequence[SeedRecord]):
        """Insert all seed records and the marker in one transaction."""
        with self._connect() as conn:
            try:
                for record in records:
                    conn.execute(
                        "INSERT INTO cards (id, word, meaning, is_premium) VALUES (?, ?, ?, ?)",
                        (record.id, record.word, record.meaning, int(record.is_premium))
                    )
                conn.execute(
                    "INSERT INTO meta (key, value) VALUES (?, ?)",
                    (SEED_MARKER_KEY, "1")
                )
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise SeedError(f"Seed transaction rolled back: {e}") from e

    def is_seeded(self) -> bool:
        """Check whether the seed marker is present."""
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT value FROM meta WHERE key = ?", (SEED_MARKER_KEY,)
            )
            return cursor.fetchone() is not None

    # -------------------------------------------------------------------------
    # Catalog reads
    # -------------------------------------------------------------------------

    def list_items(self, includes_premium: bool) -> list[CatalogEntry]:
        """
        Get catalog items with their learned flag, ordered by word.

        Args:
            includes_premium: False restricts the result to free-tier items

        Returns:
            List of CatalogEntry (missing progress counts as not learned)
        """
        query = """SELECT c.id, c.word, c.meaning, c.is_premium,
                          COALESCE(p.learned, 0) AS learned
                   FROM cards c
                   LEFT JOIN progress p ON p.card_id = c.id"""
        if not includes_premium:
            query += " WHERE c.is_premium = 0"
        query += " ORDER BY c.word ASC"

        with self._connect() as conn:
            cursor = conn.execute(query)
            return [
                CatalogEntry(
                    item=CatalogItem(
                        id=row["id"],
                        word=row["word"],
                        meaning=row["meaning"],
                        is_premium=bool(row["is_premium"]),
                    ),
                    learned=bool(row["learned"]),
                )
                for row in cursor.fetchall()
            ]

    def count_learned(self, includes_premium: bool) -> int:
        """Count learned cards, restricted to free-tier cards unless includes_premium."""
        if includes_premium:
            query = "SELECT COUNT(*) AS n FROM progress WHERE learned = 1"
        else:
            query = """SELECT COUNT(*) AS n
                       FROM progress p
                       JOIN cards c ON c.id = p.card_id
                       WHERE p.learned = 1 AND c.is_premium = 0"""

        with self._connect() as conn:
            return conn.execute(query).fetchone()["n"]

    def count_items(self, includes_premium: bool) -> int:
        """Count catalog items visible to the given tier."""
        query = "SELECT COUNT(*) AS n FROM cards"
        if not includes_premium:
            query += " WHERE is_premium = 0"

        with self._connect() as conn:
            return conn.execute(query).fetchone()["n"]

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def set_learned(self, card_id: int, learned: bool):
        """Insert or update the learned flag for a card (one row per card)."""
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO progress (card_id, learned)
                   VALUES (?, ?)
                   ON CONFLICT(card_id) DO UPDATE SET
                     learned = excluded.learned""",
                (card_id, int(learned))
            )
            conn.commit()

    def get_progress(self, card_id: int) -> Optional[ProgressRecord]:
        """Get the progress record for a card, or None if never toggled."""
        with self._connect() as conn:
            cursor = conn.execute(
                """SELECT card_id, learned, correct, wrong, reps,
                          interval_days, ease, due_at
                   FROM progress
                   WHERE card_id = ?""",
                (card_id,)
            )
            row = cursor.fetchone()
            if not row:
                return None

            return ProgressRecord(
                card_id=row["card_id"],
                learned=bool(row["learned"]),
                correct_count=row["correct"],
                wrong_count=row["wrong"],
                repetitions=row["reps"],
                interval_days=row["interval_days"],
                ease=row["ease"],
                due_at=row["due_at"],
            )

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_stats(self, includes_premium: bool) -> dict:
        """
        Get learning statistics for the visible tier.

        Returns:
            Dictionary with total/learned counts and completion percent
        """
        total = self.count_items(includes_premium)
        learned = self.count_learned(includes_premium)

        return {
            "total_cards": total,
            "learned": learned,
            "remaining": total - learned,
            "completion_percent": round(learned / total * 100, 1) if total > 0 else 0,
        }
