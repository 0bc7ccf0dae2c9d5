"""
Sicilia - Sicilian vocabulary trainer.

Flashcards with a learned flag, multiple-choice quizzes and an AI tutor,
backed by a local SQLite catalog gated by a subscription entitlement.
"""

__version__ = "0.1.0"
