"""
Sicilia Quiz - Multiple-choice quizzes over the visible catalog.

This module provides:
- generate_questions: randomized question set with distractors
- QuizSession: configuring -> answering -> reviewing state machine
"""

from .generator import (
    generate_questions,
    QUESTION_COUNTS,
    MAX_DISTRACTORS,
)

from .session import (
    QuizSession,
    calculate_quiz_score,
)

__all__ = [
    "generate_questions",
    "QUESTION_COUNTS",
    "MAX_DISTRACTORS",
    "QuizSession",
    "calculate_quiz_score",
]
