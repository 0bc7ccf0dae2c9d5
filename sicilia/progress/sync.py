"""
ProgressSync - Optimistic learned-flag toggling for the vocabulary view.

The in-memory view changes first so the UI reflects a tap immediately;
the upsert follows, and a failed upsert restores the previous state.
"""

import logging
import threading
from typing import Optional

from sicilia.errors import StorageError, SyncError
from sicilia.schemas import CatalogEntry
from sicilia.store import CatalogStore


logger = logging.getLogger(__name__)


class ProgressSync:
    """
    In-memory snapshot of the visible catalog tier plus its learned count.

    Invariant: learned_count == number of entries with learned=True.
    Toggles on the same card are serialized; different cards are independent.
    """

    def __init__(self, store: CatalogStore):
        self.store = store
        self.entries: list[CatalogEntry] = []
        self.learned_count = 0
        self.includes_premium = False
        self._index: dict[int, CatalogEntry] = {}
        self._view_lock = threading.Lock()
        self._card_locks: dict[int, threading.Lock] = {}
        self.last_error: Optional[SyncError] = None

    def load(self, includes_premium: bool) -> list[CatalogEntry]:
        """
        Snapshot the visible tier from the store.

        On storage failure the view degrades to an empty list and a zero count.
        """
        try:
            entries = self.store.list_items(includes_premium)
        except StorageError as e:
            logger.error(f"Could not load catalog: {e}")
            entries = []

        with self._view_lock:
            self.includes_premium = includes_premium
            self.entries = entries
            self._index = {entry.id: entry for entry in entries}
            self.learned_count = sum(1 for entry in entries if entry.learned)
        return self.entries

    def get(self, card_id: int) -> Optional[CatalogEntry]:
        return self._index.get(card_id)

    def pop_error(self) -> Optional[SyncError]:
        """Return the last failed toggle once, then forget it."""
        error, self.last_error = self.last_error, None
        return error

    def _lock_for(self, card_id: int) -> threading.Lock:
        with self._view_lock:
            lock = self._card_locks.get(card_id)
            if lock is None:
                lock = self._card_locks[card_id] = threading.Lock()
            return lock

    def _apply(self, entry: CatalogEntry, learned: bool):
        """
        Set the in-memory flag and keep the counter in step.

        An entry from a view that load() has since replaced no longer
        counts towards learned_count.
        """
        with self._view_lock:
            if entry.learned == learned:
                return
            entry.learned = learned
            if self._index.get(entry.id) is entry:
                self.learned_count += 1 if learned else -1

    def toggle(self, card_id: int) -> bool:
        """
        Flip the learned flag of a visible card.

        Returns:
            The new learned value

        Raises:
            KeyError: If the card is not in the current view
            SyncError: If persisting failed (the view has been restored)
        """
        entry = self._index.get(card_id)
        if entry is None:
            raise KeyError(card_id)

        with self._lock_for(card_id):
            previous = entry.learned
            learned = not previous
            self._apply(entry, learned)

            try:
                self.store.set_learned(card_id, learned)
            except StorageError as e:
                self._apply(entry, previous)
                logger.warning(f"Rolled back learned={learned} for card {card_id}: {e}")
                error = SyncError(card_id, learned)
                self.last_error = error
                raise error from e

        return learned
