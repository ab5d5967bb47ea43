"""Cards, hand classification and probability estimation."""

from .cards import (
    Card, Rank, Suit, Deck, DeckExhaustedError, DuplicateCardError,
    create_deck, exclude, parse_cards, shuffle,
)
from .hands import HandCategory, UnderspecifiedHandError, classify, category_score
from .equity import (
    EstimatorConfig, HandDistribution, HandEstimate, ProbabilityEstimator, estimate,
)
from .state import (
    HandState, Street, deal_initial, deal_flop, deal_turn, deal_river,
    next_street, override_card,
)

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Deck",
    "DeckExhaustedError",
    "DuplicateCardError",
    "create_deck",
    "exclude",
    "parse_cards",
    "shuffle",
    "HandCategory",
    "UnderspecifiedHandError",
    "classify",
    "category_score",
    "EstimatorConfig",
    "HandDistribution",
    "HandEstimate",
    "ProbabilityEstimator",
    "estimate",
    "HandState",
    "Street",
    "deal_initial",
    "deal_flop",
    "deal_turn",
    "deal_river",
    "next_street",
    "override_card",
]
