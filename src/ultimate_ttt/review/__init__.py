"""
Review module - move-quality labels for played games.
"""

from ultimate_ttt.review.analyzer import (
    MoveReview,
    classify,
    evaluation_bar,
    review_match,
)

__all__ = [
    "MoveReview",
    "classify",
    "review_match",
    "evaluation_bar",
]
