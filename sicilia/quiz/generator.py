"""
Multiple-choice question generation.

Questions are drawn from a snapshot of the catalog visible to the
current tier. Each question pairs a word with its meaning and up to
three distractor meanings taken from the same pool.
"""

import random
from typing import Optional, Sequence

from sicilia.errors import InsufficientPoolError
from sicilia.schemas import CatalogItem, QuizQuestion


QUESTION_COUNTS = (5, 10, 20)
MAX_DISTRACTORS = 3


def generate_questions(
    pool: Sequence[CatalogItem],
    count: int,
    rng: Optional[random.Random] = None,
) -> list[QuizQuestion]:
    """
    Build a randomized question set.

    Args:
        pool: Catalog items visible to the current tier
        count: Requested number of questions
        rng: Random source (tests pass a seeded one)

    Returns:
        min(count, len(pool)) questions in draw order

    Raises:
        InsufficientPoolError: If the pool cannot produce a question with a distractor
        ValueError: If count is not positive
    """
    if count <= 0:
        raise ValueError(f"Question count must be positive, got {count}")

    required = min(count, 2)
    if len(pool) < required:
        raise InsufficientPoolError(len(pool), required)

    # Distinct meanings, first-seen order so a seeded rng is reproducible
    meanings = list(dict.fromkeys(item.meaning for item in pool))
    if len(meanings) < 2:
        raise InsufficientPoolError(len(meanings), 2)

    rng = rng or random.Random()

    drawn = list(pool)
    rng.shuffle(drawn)
    drawn = drawn[:min(count, len(pool))]

    questions = []
    for item in drawn:
        alternatives = [m for m in meanings if m != item.meaning]
        distractors = rng.sample(alternatives, min(MAX_DISTRACTORS, len(alternatives)))

        choices = [item.meaning, *distractors]
        rng.shuffle(choices)

        questions.append(QuizQuestion(
            item_id=item.id,
            prompt=item.word,
            choices=choices,
            correct_index=choices.index(item.meaning),
        ))
    return questions
