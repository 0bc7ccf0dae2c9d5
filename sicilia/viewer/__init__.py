"""
Sicilia Viewer - HTML rendering helpers for the Streamlit app.
"""

from .quiz import (
    get_quiz_css,
    render_quiz_prompt,
    render_quiz_score,
    render_review_item,
    render_quiz_review,
)

__all__ = [
    "get_quiz_css",
    "render_quiz_prompt",
    "render_quiz_score",
    "render_review_item",
    "render_quiz_review",
]
