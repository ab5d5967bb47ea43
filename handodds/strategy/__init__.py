"""Betting decision module."""

from .decision import (
    Action,
    BettingContext,
    Decision,
    DecisionConfig,
    DecisionHeuristic,
    Player,
    Position,
    decide,
)

__all__ = [
    "Action",
    "BettingContext",
    "Decision",
    "DecisionConfig",
    "DecisionHeuristic",
    "Player",
    "Position",
    "decide",
]
