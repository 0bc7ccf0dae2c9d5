"""
Error types for Sicilia.

Storage and seeding errors are logged and degrade the UI to an empty
state; they never crash the app. Quiz, sync, entitlement and tutor
errors are reported to the user.
"""


class SiciliaError(Exception):
    """Base class for all application errors."""


class StorageError(SiciliaError):
    """Schema or storage access failed."""


class SeedError(StorageError):
    """The first-run seed transaction failed and was rolled back."""


class SyncError(SiciliaError):
    """Persisting a learned-flag toggle failed; the optimistic change was reverted."""

    def __init__(self, card_id: int, learned: bool):
        self.card_id = card_id
        self.learned = learned
        super().__init__(f"Could not save learned={learned} for card {card_id}")


class InsufficientPoolError(SiciliaError, ValueError):
    """Not enough catalog items to build a quiz."""

    def __init__(self, pool_size: int, required: int):
        self.pool_size = pool_size
        self.required = required
        super().__init__(
            f"Need at least {required} words to build a quiz, have {pool_size}"
        )


class QuizStateError(SiciliaError, RuntimeError):
    """Quiz action is not valid in the current phase."""


class EntitlementError(SiciliaError):
    """Entitlement fetch or purchase failed."""


class TutorError(SiciliaError):
    """The tutor chat-completion call failed."""
