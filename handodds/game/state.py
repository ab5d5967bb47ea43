"""Street-by-street hand progression with probability estimates."""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .cards import (
    Card, DeckExhaustedError, DuplicateCardError, RandomSource,
    create_deck, exclude,
)
from .equity import HOLE_SIZE, HandEstimate, ProbabilityEstimator

logger = logging.getLogger(__name__)


class Street(Enum):
    """Betting streets, valued by board size."""
    PREFLOP = 0
    FLOP = 3
    TURN = 4
    RIVER = 5

    @classmethod
    def from_board_size(cls, size: int) -> "Street":
        for street in cls:
            if street.value == size:
                return street
        raise ValueError(f"No street has a board of {size} cards")

    @classmethod
    def from_string(cls, s: str) -> "Street":
        """Parse street from string."""
        s = s.upper().strip()
        mapping = {
            "PREFLOP": cls.PREFLOP,
            "PRE-FLOP": cls.PREFLOP,
            "FLOP": cls.FLOP,
            "TURN": cls.TURN,
            "RIVER": cls.RIVER,
        }
        if s in mapping:
            return mapping[s]
        raise ValueError(f"Unknown street: {s}")

    @property
    def board_size(self) -> int:
        return self.value

    @property
    def cards_to_come(self) -> int:
        return Street.RIVER.value - self.value

    @property
    def title(self) -> str:
        return f"{self.name.title()} odds"

    @property
    def description(self) -> str:
        if self is Street.RIVER:
            return "Final odds"
        n = self.cards_to_come
        return f"Based on the {n} card{'s' if n > 1 else ''} to come"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class HandState:
    """
    One player's view of a hand in progress.

    Transitions return a new HandState; `deck` holds the undealt cards
    in dealing order.
    """
    hole_cards: tuple[Card, ...]
    community_cards: tuple[Card, ...]
    deck: tuple[Card, ...]
    estimate: HandEstimate

    @property
    def street(self) -> Street:
        return Street.from_board_size(len(self.community_cards))

    @property
    def placed_cards(self) -> tuple[Card, ...]:
        """Hole cards followed by the board."""
        return self.hole_cards + self.community_cards

    def __str__(self) -> str:
        hole = " ".join(str(c) for c in self.hole_cards)
        board = " ".join(str(c) for c in self.community_cards) or "-"
        return f"{self.street}: {hole} | {board}"


def _estimate(
    hole: tuple[Card, ...],
    board: tuple[Card, ...],
    deck: tuple[Card, ...],
    estimator: Optional[ProbabilityEstimator],
) -> HandEstimate:
    estimator = estimator or ProbabilityEstimator()
    return estimator.estimate(hole, board, deck)


def deal_initial(
    rng: RandomSource = None,
    estimator: Optional[ProbabilityEstimator] = None,
) -> HandState:
    """
    Start a hand: shuffle a fresh deck and deal two hole cards.

    Args:
        rng: Random source for the shuffle
        estimator: Estimator for the probabilities (default config if None)

    Returns:
        Preflop HandState
    """
    deck = create_deck(rng)
    hole = tuple(deck.deal(HOLE_SIZE))
    remaining = tuple(deck.cards)
    logger.debug("Dealt hole cards %s", " ".join(map(str, hole)))

    return HandState(
        hole_cards=hole,
        community_cards=(),
        deck=remaining,
        estimate=_estimate(hole, (), remaining, estimator),
    )


_PREVIOUS_STREET = {
    Street.FLOP: Street.PREFLOP,
    Street.TURN: Street.FLOP,
    Street.RIVER: Street.TURN,
}


def _deal_street(
    state: HandState,
    expected: Street,
    estimator: Optional[ProbabilityEstimator],
) -> HandState:
    """Deal the board cards that move `state` onto `expected`."""
    previous = _PREVIOUS_STREET[expected]
    if state.street is not previous:
        raise ValueError(
            f"Cannot deal the {expected.name.lower()} on the {state.street.name.lower()}"
        )

    n = expected.board_size - previous.board_size
    if n > len(state.deck):
        raise DeckExhaustedError(f"Cannot deal {n} cards, only {len(state.deck)} remaining")

    board = state.community_cards + state.deck[:n]
    deck = state.deck[n:]
    logger.debug("Dealt %s: %s", expected.name.lower(), " ".join(map(str, state.deck[:n])))

    return replace(
        state,
        community_cards=board,
        deck=deck,
        estimate=_estimate(state.hole_cards, board, deck, estimator),
    )


def deal_flop(state: HandState, estimator: Optional[ProbabilityEstimator] = None) -> HandState:
    """Deal three board cards to a preflop hand."""
    return _deal_street(state, Street.FLOP, estimator)


def deal_turn(state: HandState, estimator: Optional[ProbabilityEstimator] = None) -> HandState:
    """Deal the fourth board card."""
    return _deal_street(state, Street.TURN, estimator)


def deal_river(state: HandState, estimator: Optional[ProbabilityEstimator] = None) -> HandState:
    """Deal the fifth board card."""
    return _deal_street(state, Street.RIVER, estimator)


def next_street(
    state: HandState,
    rng: RandomSource = None,
    estimator: Optional[ProbabilityEstimator] = None,
) -> HandState:
    """Advance to the next street, or start a new hand after the river."""
    street = state.street
    if street is Street.PREFLOP:
        return deal_flop(state, estimator)
    if street is Street.FLOP:
        return deal_turn(state, estimator)
    if street is Street.TURN:
        return deal_river(state, estimator)
    return deal_initial(rng, estimator)


def override_card(
    state: HandState,
    slot: str,
    index: int,
    card: Card,
    rng: RandomSource = None,
    estimator: Optional[ProbabilityEstimator] = None,
) -> HandState:
    """
    Force a specific card into a hole or board slot.

    The deck is rebuilt from a freshly shuffled 52 cards minus every
    placed card, then probabilities are re-estimated.

    Args:
        state: Current hand
        slot: "hole" or "board"
        index: Position within that slot
        card: Card to place
        rng: Random source for the rebuilt deck
        estimator: Estimator for the probabilities

    Returns:
        New HandState

    Raises:
        DuplicateCardError: `card` already sits in another slot
    """
    slot = slot.lower().strip()
    if slot == "hole":
        cards = list(state.hole_cards)
    elif slot == "board":
        cards = list(state.community_cards)
    else:
        raise ValueError(f"Unknown slot: {slot}")

    if not 0 <= index < len(cards):
        raise ValueError(f"No {slot} card at index {index}")

    others = [c for c in state.placed_cards if c != cards[index]]
    if card in others:
        raise DuplicateCardError(card)

    cards[index] = card
    hole = tuple(cards) if slot == "hole" else state.hole_cards
    board = tuple(cards) if slot == "board" else state.community_cards

    deck = tuple(exclude(create_deck(rng), hole + board))
    logger.debug("Placed %s in %s slot %d", card, slot, index)

    return HandState(
        hole_cards=hole,
        community_cards=board,
        deck=deck,
        estimate=_estimate(hole, board, deck, estimator),
    )
