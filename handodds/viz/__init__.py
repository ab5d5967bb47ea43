"""Visualization module."""

from .probabilities import ProbabilityDisplay, distribution_table, format_cards

__all__ = [
    "ProbabilityDisplay",
    "distribution_table",
    "format_cards",
]
