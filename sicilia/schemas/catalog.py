"""
Catalog schemas for Sicilia.

Defines Pydantic models for the vocabulary catalog including:
- Seed records (static asset format)
- Catalog items and read snapshots
- Per-card progress records
"""

from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional


# Key under which the one-shot seed marker is stored in the meta table
SEED_MARKER_KEY = "seeded_v1"
DEFAULT_EASE = 2.5


# -----------------------------------------------------------------------------
# Seed asset
# -----------------------------------------------------------------------------

class SeedRecord(BaseModel):
    """
    One element of the seed catalog asset.

    Accepts both `meaning`/`isPremium` and the older
    `meaning_ja`/`is_premium` spellings.
    """
    id: int
    word: str = Field(..., min_length=1)
    meaning: str = Field(
        ..., min_length=1,
        validation_alias=AliasChoices("meaning", "meaning_ja"),
    )
    is_premium: bool = Field(
        default=False,
        validation_alias=AliasChoices("isPremium", "is_premium"),
    )


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------

class CatalogItem(BaseModel):
    """A vocabulary entry. Immutable once seeded."""
    model_config = ConfigDict(frozen=True)

    id: int
    word: str = Field(..., min_length=1)      # Sicilian term
    meaning: str = Field(..., min_length=1)   # translation (Japanese)
    is_premium: bool = False                  # False = free tier


class CatalogEntry(BaseModel):
    """Catalog item joined with its learned flag (missing progress = not learned)."""
    item: CatalogItem
    learned: bool = False

    @property
    def id(self) -> int:
        return self.item.id


class ProgressRecord(BaseModel):
    """
    Learning progress for one catalog item (at most one per card).

    Only `learned` is driven by the app today. The spaced-repetition
    fields are stored and returned untouched.
    """
    card_id: int
    learned: bool = False
    correct_count: int = 0
    wrong_count: int = 0
    repetitions: int = 0
    interval_days: int = 0
    ease: float = DEFAULT_EASE
    due_at: Optional[int] = None  # epoch ms
