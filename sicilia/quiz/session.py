"""
QuizSession - Scoring state machine for one quiz attempt.

configuring -> answering -> reviewing, and reset() back to configuring.
"""

import logging
import random
from typing import Optional, Sequence

from sicilia.errors import InsufficientPoolError, QuizStateError
from sicilia.schemas import (
    CatalogItem,
    QuestionReview,
    QuizPhase,
    QuizQuestion,
    QuizResult,
)

from .generator import generate_questions


logger = logging.getLogger(__name__)


def calculate_quiz_score(total: int, correct_count: int) -> dict:
    """
    Calculate quiz score.

    Args:
        total: Total questions
        correct_count: Number answered correctly

    Returns:
        Dict with score info
    """
    if total == 0:
        return {"score": 0.0, "percent": 0, "correct": 0, "total": 0}

    score = correct_count / total
    return {
        "score": round(score, 2),
        "percent": round(score * 100),
        "correct": correct_count,
        "total": total,
    }


class QuizSession:
    """One quiz attempt: configure, answer each question, review."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng
        self.reset()

    def reset(self):
        """Return to configuring, discarding the current attempt."""
        self.phase = QuizPhase.CONFIGURING
        self.questions: list[QuizQuestion] = []
        self.answers: list[int] = []
        self.correct_count = 0
        self.last_error: Optional[InsufficientPoolError] = None

    def _require(self, phase: QuizPhase):
        if self.phase != phase:
            raise QuizStateError(
                f"Quiz is {self.phase.value}, expected {phase.value}"
            )

    @property
    def cursor(self) -> int:
        return len(self.answers)

    @property
    def progress(self) -> tuple[int, int]:
        """(answered, total)"""
        return self.cursor, len(self.questions)

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.phase != QuizPhase.ANSWERING:
            return None
        return self.questions[self.cursor]

    def start(self, pool: Sequence[CatalogItem], count: int) -> list[QuizQuestion]:
        """
        Generate questions and begin answering.

        Raises:
            InsufficientPoolError: Pool too small; the session stays in configuring
        """
        self._require(QuizPhase.CONFIGURING)
        try:
            questions = generate_questions(pool, count, self.rng)
        except InsufficientPoolError as e:
            self.last_error = e
            logger.info(f"Quiz not started: {e}")
            raise

        self.last_error = None
        self.questions = questions
        self.answers = []
        self.correct_count = 0
        self.phase = QuizPhase.ANSWERING
        return questions

    def answer(self, choice_index: int) -> bool:
        """
        Submit an answer for the current question.

        Returns:
            Whether the chosen index was correct
        """
        self._require(QuizPhase.ANSWERING)
        question = self.questions[self.cursor]
        if not 0 <= choice_index < len(question.choices):
            raise ValueError(
                f"Choice {choice_index} out of range for {len(question.choices)} choices"
            )

        is_correct = choice_index == question.correct_index
        self.answers.append(choice_index)
        if is_correct:
            self.correct_count += 1

        if self.cursor == len(self.questions):
            self.phase = QuizPhase.REVIEWING
        return is_correct

    def result(self) -> QuizResult:
        """Final score and per-question breakdown."""
        self._require(QuizPhase.REVIEWING)
        score = calculate_quiz_score(len(self.questions), self.correct_count)

        breakdown = [
            QuestionReview(
                prompt=question.prompt,
                correct_choice=question.correct_choice,
                chosen_choice=question.choices[chosen],
                is_correct=chosen == question.correct_index,
            )
            for question, chosen in zip(self.questions, self.answers)
        ]
        return QuizResult(
            correct=score["correct"],
            total=score["total"],
            percent=score["percent"],
            breakdown=breakdown,
        )
