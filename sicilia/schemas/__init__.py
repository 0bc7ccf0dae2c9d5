"""
Sicilia Schemas - Pydantic models for the vocabulary trainer.

This module exports all schema classes for:
- Catalog: seed records, catalog items, progress records
- Quiz: questions, phases, results
- Session: entitlement state, tutor chat messages
"""

# Catalog schemas
from .catalog import (
    SeedRecord,
    CatalogItem,
    CatalogEntry,
    ProgressRecord,
    SEED_MARKER_KEY,
    DEFAULT_EASE,
)

# Quiz schemas
from .quiz import (
    QuizPhase,
    QuizQuestion,
    QuestionReview,
    QuizResult,
)

# Session schemas
from .session import (
    EntitlementState,
    ChatMessage,
)

__all__ = [
    # Catalog
    'SeedRecord',
    'CatalogItem',
    'CatalogEntry',
    'ProgressRecord',
    'SEED_MARKER_KEY',
    'DEFAULT_EASE',
    # Quiz
    'QuizPhase',
    'QuizQuestion',
    'QuestionReview',
    'QuizResult',
    # Session
    'EntitlementState',
    'ChatMessage',
]
