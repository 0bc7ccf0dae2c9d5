"""
Quiz schemas for Sicilia.

Defines Pydantic models for multiple-choice quizzes:
- Generated questions
- Quiz phases
- Final result with per-question breakdown
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class QuizPhase(str, Enum):
    CONFIGURING = "configuring"
    ANSWERING = "answering"
    REVIEWING = "reviewing"


class QuizQuestion(BaseModel):
    """A multiple-choice question built from one catalog item."""
    item_id: int
    prompt: str                                   # the Sicilian word
    choices: list[str] = Field(..., min_length=2, max_length=4)
    correct_index: int = Field(..., ge=0)

    @model_validator(mode="after")
    def correct_index_in_range(self):
        if self.correct_index >= len(self.choices):
            raise ValueError("correct_index must point into choices")
        return self

    @property
    def correct_choice(self) -> str:
        return self.choices[self.correct_index]


class QuestionReview(BaseModel):
    prompt: str
    correct_choice: str
    chosen_choice: str
    is_correct: bool


class QuizResult(BaseModel):
    correct: int
    total: int
    percent: int  # 0-100, rounded
    breakdown: list[QuestionReview] = []
