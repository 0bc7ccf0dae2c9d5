"""
CatalogStore tests: seeding, tier filtering, counts and progress upserts.
"""

import sqlite3

import pytest

from sicilia.errors import StorageError
from sicilia.schemas import SeedRecord, DEFAULT_EASE
from sicilia.store import CatalogStore


def count_rows(store: CatalogStore, table: str) -> int:
    conn = sqlite3.connect(str(store.db_path))
    try:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    finally:
        conn.close()


class TestSeeding:
    """Test first-run seeding."""

    def test_initialize_seeds_catalog(self, store):
        assert store.is_seeded()
        assert count_rows(store, "cards") == 3

    def test_initialize_twice_keeps_row_count(self, store):
        assert store.initialize()
        assert count_rows(store, "cards") == 3

    def test_reopening_database_does_not_reseed(self, store, seed_records):
        extra = seed_records + [SeedRecord(id=4, word="Mari", meaning="海")]
        reopened = CatalogStore(store.db_path, seed_records=extra)
        assert reopened.initialize()
        assert count_rows(reopened, "cards") == 3

    def test_failed_insert_rolls_back_everything(self, tmp_path):
        # duplicate id makes the second insert fail mid-transaction
        records = [
            SeedRecord(id=1, word="Ciau", meaning="こんにちは"),
            SeedRecord(id=1, word="Grazzi", meaning="ありがとう"),
        ]
        store = CatalogStore(tmp_path / "sicilia.db", seed_records=records)

        assert store.initialize() is False
        assert count_rows(store, "cards") == 0
        assert count_rows(store, "meta") == 0
        assert not store.is_seeded()

    def test_failed_seed_is_retried(self, tmp_path, seed_records):
        db_path = tmp_path / "sicilia.db"
        bad = CatalogStore(db_path, seed_records=[seed_records[0], seed_records[0]])
        assert bad.initialize() is False

        good = CatalogStore(db_path, seed_records=seed_records)
        assert good.initialize()
        assert count_rows(good, "cards") == 3

    def test_missing_seed_asset_is_not_fatal(self, tmp_path):
        store = CatalogStore(tmp_path / "sicilia.db", seed_path=tmp_path / "missing.json")
        assert store.initialize() is False
        assert store.list_items(includes_premium=True) == []

    def test_undecodable_seed_asset_is_not_fatal(self, tmp_path):
        seed_path = tmp_path / "seed.json"
        seed_path.write_bytes(b'[{"id": 1, "word": "\xff\xfe", "meaning": "x"}]')
        store = CatalogStore(tmp_path / "sicilia.db", seed_path=seed_path)

        assert store.initialize() is False
        assert not store.is_seeded()
        assert store.list_items(includes_premium=True) == []

    def test_uncreatable_data_directory_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")
        store = CatalogStore(blocker / "sicilia.db", seed_records=[])
        with pytest.raises(StorageError):
            store.initialize()

    def test_seed_from_json_asset(self, tmp_path):
        seed_path = tmp_path / "seed.json"
        seed_path.write_text(
            '[{"id": 1, "word": "Ciau", "meaning": "こんにちは", "isPremium": false},'
            ' {"id": 2, "word": "Pani", "meaning_ja": "パン", "is_premium": true}]',
            encoding="utf-8",
        )
        store = CatalogStore(tmp_path / "sicilia.db", seed_path=seed_path)
        assert store.initialize()

        items = store.list_items(includes_premium=True)
        assert [(e.item.word, e.item.is_premium) for e in items] == [
            ("Ciau", False), ("Pani", True)
        ]

    def test_bundled_seed_asset_loads(self, tmp_path):
        store = CatalogStore(tmp_path / "sicilia.db")
        assert store.initialize()
        assert store.count_items(includes_premium=False) > 0
        assert store.count_items(includes_premium=True) > store.count_items(includes_premium=False)

    def test_unopenable_database_raises_storage_error(self, tmp_path):
        # a directory where the database file should be
        db_path = tmp_path / "db_dir"
        db_path.mkdir()
        store = CatalogStore(db_path, seed_records=[])
        with pytest.raises(StorageError):
            store.initialize()


class TestListing:
    """Test tier-filtered catalog reads."""

    def test_free_tier_only_returns_free_items(self, store):
        entries = store.list_items(includes_premium=False)
        assert [e.id for e in entries] == [1, 2]
        assert all(not e.item.is_premium for e in entries)

    def test_pro_tier_returns_everything(self, store):
        entries = store.list_items(includes_premium=True)
        assert [e.item.word for e in entries] == ["Ciau", "Grazzi", "Pani"]

    def test_ordering_is_case_sensitive(self, tmp_path):
        records = [
            SeedRecord(id=1, word="beddu", meaning="美しい"),
            SeedRecord(id=2, word="Zitu", meaning="花婿"),
            SeedRecord(id=3, word="Amicu", meaning="友達"),
        ]
        store = CatalogStore(tmp_path / "sicilia.db", seed_records=records)
        store.initialize()

        words = [e.item.word for e in store.list_items(includes_premium=True)]
        assert words == ["Amicu", "Zitu", "beddu"]

    def test_missing_progress_means_not_learned(self, store):
        assert all(not e.learned for e in store.list_items(includes_premium=True))

    def test_learned_flag_is_joined(self, store):
        store.set_learned(2, True)
        learned = {e.id: e.learned for e in store.list_items(includes_premium=True)}
        assert learned == {1: False, 2: True, 3: False}


class TestCounts:
    """Test learned counts and statistics."""

    def test_count_learned_starts_at_zero(self, store):
        assert store.count_learned(includes_premium=False) == 0
        assert store.count_learned(includes_premium=True) == 0

    def test_premium_progress_hidden_from_free_count(self, store):
        store.set_learned(1, True)
        store.set_learned(3, True)
        assert store.count_learned(includes_premium=False) == 1
        assert store.count_learned(includes_premium=True) == 2

    def test_get_stats(self, store):
        store.set_learned(1, True)
        stats = store.get_stats(includes_premium=False)
        assert stats["total_cards"] == 2
        assert stats["learned"] == 1
        assert stats["remaining"] == 1
        assert stats["completion_percent"] == 50.0


class TestProgressUpsert:
    """Test learned-flag persistence."""

    def test_toggle_twice_leaves_one_row(self, store):
        store.set_learned(1, True)
        store.set_learned(1, False)

        assert count_rows(store, "progress") == 1
        assert store.get_progress(1).learned is False

    def test_untouched_card_has_no_progress(self, store):
        assert store.get_progress(2) is None

    def test_reserved_fields_default(self, store):
        store.set_learned(1, True)
        record = store.get_progress(1)
        assert record.correct_count == 0
        assert record.wrong_count == 0
        assert record.repetitions == 0
        assert record.interval_days == 0
        assert record.ease == DEFAULT_EASE
        assert record.due_at is None

    def test_upsert_preserves_reserved_fields(self, store):
        store.set_learned(1, True)
        conn = sqlite3.connect(str(store.db_path))
        conn.execute("UPDATE progress SET reps = 4, due_at = 1700000000000 WHERE card_id = 1")
        conn.commit()
        conn.close()

        store.set_learned(1, False)
        record = store.get_progress(1)
        assert record.learned is False
        assert record.repetitions == 4
        assert record.due_at == 1700000000000


class TestEndToEnd:
    """Free user browses, learns one word, and the count follows."""

    def test_free_user_scenario(self, store):
        entries = store.list_items(includes_premium=False)
        assert [e.id for e in entries] == [1, 2]
        assert store.count_learned(includes_premium=False) == 0

        store.set_learned(1, True)
        assert store.count_learned(includes_premium=False) == 1
