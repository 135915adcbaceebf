"""Reviewer selection."""
from .strategy import MAX_REVIEWERS, AssignmentStrategy

__all__ = [
    "AssignmentStrategy",
    "MAX_REVIEWERS",
]
