"""
ProgressSync tests: optimistic toggles, rollback and the count invariant.
"""

import threading
import time
from unittest.mock import patch

import pytest

from sicilia.errors import StorageError, SyncError
from sicilia.progress import ProgressSync


def assert_count_consistent(sync: ProgressSync):
    assert sync.learned_count == sum(1 for e in sync.entries if e.learned)


class TestLoad:
    """Test loading the visible tier."""

    def test_load_free_tier(self, store):
        sync = ProgressSync(store)
        entries = sync.load(includes_premium=False)
        assert [e.id for e in entries] == [1, 2]
        assert sync.learned_count == 0

    def test_load_picks_up_persisted_progress(self, store):
        store.set_learned(2, True)
        sync = ProgressSync(store)
        sync.load(includes_premium=True)
        assert sync.learned_count == 1
        assert sync.get(2).learned is True

    def test_storage_failure_degrades_to_empty(self, store):
        sync = ProgressSync(store)
        with patch.object(store, "list_items", side_effect=StorageError("disk gone")):
            entries = sync.load(includes_premium=False)
        assert entries == []
        assert sync.learned_count == 0


class TestToggle:
    """Test optimistic toggling."""

    def test_toggle_persists(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)

        assert sync.toggle(1) is True
        assert sync.learned_count == 1
        assert store.get_progress(1).learned is True
        assert store.count_learned(includes_premium=False) == 1

    def test_toggle_back(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)

        sync.toggle(1)
        assert sync.toggle(1) is False
        assert sync.learned_count == 0
        assert store.get_progress(1).learned is False
        assert_count_consistent(sync)

    def test_view_changes_before_persistence(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)
        seen = {}

        def record_view(card_id, learned):
            seen["flag"] = sync.get(card_id).learned
            seen["count"] = sync.learned_count

        with patch.object(store, "set_learned", side_effect=record_view):
            sync.toggle(2)

        assert seen == {"flag": True, "count": 1}

    def test_failed_persistence_rolls_back(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)
        sync.toggle(2)

        with patch.object(store, "set_learned", side_effect=StorageError("locked")):
            with pytest.raises(SyncError) as exc_info:
                sync.toggle(1)

        assert exc_info.value.card_id == 1
        assert exc_info.value.learned is True
        assert sync.get(1).learned is False
        assert sync.learned_count == 1
        assert_count_consistent(sync)
        assert store.get_progress(1) is None

    def test_unknown_card(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)
        # premium card is not visible on the free tier
        with pytest.raises(KeyError):
            sync.toggle(3)

    def test_concurrent_toggles_on_different_cards(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=True)

        threads = [threading.Thread(target=sync.toggle, args=(card_id,)) for card_id in (1, 2, 3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sync.learned_count == 3
        assert store.count_learned(includes_premium=True) == 3
        assert_count_consistent(sync)

    def test_same_card_toggles_are_serialized(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)
        persist = store.set_learned
        calls = []
        first_entered = threading.Event()

        def slow_set_learned(card_id, learned):
            calls.append(("enter", learned))
            first_entered.set()
            time.sleep(0.05)
            persist(card_id, learned)
            calls.append(("exit", learned))

        with patch.object(store, "set_learned", side_effect=slow_set_learned):
            first = threading.Thread(target=sync.toggle, args=(1,))
            first.start()
            assert first_entered.wait(timeout=5)
            second = threading.Thread(target=sync.toggle, args=(1,))
            second.start()
            first.join(timeout=5)
            second.join(timeout=5)

        assert calls == [("enter", True), ("exit", True), ("enter", False), ("exit", False)]
        assert sync.get(1).learned is False
        assert store.get_progress(1).learned is False
        assert sync.learned_count == 0
        assert_count_consistent(sync)

    def test_rollback_after_reload_keeps_count_consistent(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)
        entered = threading.Event()
        release = threading.Event()
        errors = []

        def blocked_then_failing(card_id, learned):
            entered.set()
            release.wait(timeout=5)
            raise StorageError("disk full")

        def toggle_card():
            try:
                sync.toggle(1)
            except SyncError as e:
                errors.append(e)

        with patch.object(store, "set_learned", side_effect=blocked_then_failing):
            worker = threading.Thread(target=toggle_card)
            worker.start()
            assert entered.wait(timeout=5)
            sync.load(includes_premium=False)
            release.set()
            worker.join(timeout=5)

        assert len(errors) == 1
        assert sync.learned_count == 0
        assert sync.get(1).learned is False
        assert_count_consistent(sync)


class TestFailureNotice:
    """Test that a failed toggle is kept for the next render."""

    def test_failed_toggle_is_kept_until_popped(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)

        with patch.object(store, "set_learned", side_effect=StorageError("locked")):
            with pytest.raises(SyncError) as exc_info:
                sync.toggle(1)

        # a reload between the failure and the next render keeps the notice
        sync.load(includes_premium=False)
        assert sync.pop_error() is exc_info.value
        assert sync.pop_error() is None

    def test_successful_toggle_leaves_no_notice(self, store):
        sync = ProgressSync(store)
        sync.load(includes_premium=False)
        sync.toggle(1)
        assert sync.pop_error() is None
