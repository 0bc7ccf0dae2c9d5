"""
Quiz renderer - HTML fragments for the quiz result screen.

Provides:
- Quiz CSS
- Score box
- Per-question review list
"""

import html

from sicilia.schemas import QuestionReview, QuizResult


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-prompt {
        font-size: 2em;
        font-weight: 700;
        text-align: center;
        color: #333;
        margin: 0.5em 0 1em 0;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    .quiz-review-item {
        border-left: 4px solid #388E3C;
        background: white;
        padding: 0.6em 1em;
        margin: 0.5em 0;
        border-radius: 6px;
    }
    .quiz-review-item.wrong {
        border-left-color: #d32f2f;
    }
    .quiz-review-chosen {
        color: #d32f2f;
    }
    </style>
    """


def render_quiz_prompt(prompt: str) -> str:
    return f'<div class="quiz-prompt">{html.escape(prompt)}</div>'


def render_quiz_score(result: QuizResult) -> str:
    """Render quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{result.percent}%</div>
        <div class="quiz-score-label">{result.correct} / {result.total}</div>
    </div>
    """


def render_review_item(review: QuestionReview) -> str:
    """Render one reviewed question: prompt, correct meaning, and the wrong pick if any."""
    css_class = "quiz-review-item" if review.is_correct else "quiz-review-item wrong"
    parts = [f'<div class="{css_class}">']
    parts.append(f'<strong>{html.escape(review.prompt)}</strong> → {html.escape(review.correct_choice)}')
    if not review.is_correct:
        parts.append(
            f'<div class="quiz-review-chosen">✗ {html.escape(review.chosen_choice)}</div>'
        )
    parts.append('</div>')
    return ''.join(parts)


def render_quiz_review(result: QuizResult) -> str:
    """Render the full per-question breakdown."""
    if not result.breakdown:
        return ""
    return ''.join(render_review_item(r) for r in result.breakdown)
