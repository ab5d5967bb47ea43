"""Hand category classification."""

from collections import Counter
from enum import IntEnum
from functools import lru_cache
from typing import Iterable

from treys import Evaluator
from treys.lookup import LookupTable

from .cards import Card, Rank, ensure_distinct


class HandCategory(IntEnum):
    """Made-hand categories, weakest first."""
    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def label(self) -> str:
        """Display name, e.g. 'Two Pair'."""
        return self.name.replace("_", " ").title().replace("Of A", "of a")

    @property
    def key(self) -> str:
        """camelCase key, e.g. 'twoPair'."""
        first, *rest = self.name.lower().split("_")
        return first + "".join(word.title() for word in rest)

    @classmethod
    def from_key(cls, key: str) -> "HandCategory":
        for category in cls:
            if category.key == key:
                return category
        raise ValueError(f"Unknown hand category: {key}")


MIN_HAND_SIZE = 5
MAX_SCORE = 10

# treys rank 1 is the ace-high straight flush
_ROYAL_FLUSH_RANK = 1

# Upper bounds of each treys rank band, strongest first
_TREYS_BANDS = [
    (LookupTable.MAX_STRAIGHT_FLUSH, HandCategory.STRAIGHT_FLUSH),
    (LookupTable.MAX_FOUR_OF_A_KIND, HandCategory.FOUR_OF_A_KIND),
    (LookupTable.MAX_FULL_HOUSE, HandCategory.FULL_HOUSE),
    (LookupTable.MAX_FLUSH, HandCategory.FLUSH),
    (LookupTable.MAX_STRAIGHT, HandCategory.STRAIGHT),
    (LookupTable.MAX_THREE_OF_A_KIND, HandCategory.THREE_OF_A_KIND),
    (LookupTable.MAX_TWO_PAIR, HandCategory.TWO_PAIR),
    (LookupTable.MAX_PAIR, HandCategory.ONE_PAIR),
    (LookupTable.MAX_HIGH_CARD, HandCategory.HIGH_CARD),
]


class UnderspecifiedHandError(ValueError):
    """Raised when fewer than five cards are classified."""

    def __init__(self, num_cards: int):
        super().__init__(
            f"Need at least {MIN_HAND_SIZE} cards to classify, got {num_cards}"
        )
        self.num_cards = num_cards


def has_straight(ranks: Iterable[int]) -> bool:
    """
    Check for five consecutive distinct ranks.

    Ace also counts as low, so A-2-3-4-5 (the wheel) is a straight.
    """
    distinct = sorted(set(ranks))
    if Rank.ACE in distinct:
        distinct.insert(0, 1)

    run = 1
    for prev, cur in zip(distinct, distinct[1:]):
        run = run + 1 if cur == prev + 1 else 1
        if run >= 5:
            return True
    return False


def classify_cards(cards: list[Card]) -> HandCategory:
    """
    Classify cards without validating them.

    Looks at the whole card set rather than the best five cards, so a
    flush and a straight made from different cards still count as a
    straight flush. Fast path for callers that validated already.
    """
    rank_counts = Counter(c.rank for c in cards)
    suit_counts = Counter(c.suit for c in cards)

    is_flush = max(suit_counts.values(), default=0) >= 5
    is_straight = has_straight(rank_counts)

    multiples = Counter(rank_counts.values())
    pairs = multiples[2]
    threes = multiples[3]
    fours = multiples[4]

    if is_flush and is_straight:
        return HandCategory.STRAIGHT_FLUSH
    if fours >= 1:
        return HandCategory.FOUR_OF_A_KIND
    if threes >= 1 and pairs >= 1:
        return HandCategory.FULL_HOUSE
    if is_flush:
        return HandCategory.FLUSH
    if is_straight:
        return HandCategory.STRAIGHT
    if threes >= 1:
        return HandCategory.THREE_OF_A_KIND
    if pairs == 2:
        return HandCategory.TWO_PAIR
    if pairs == 1:
        return HandCategory.ONE_PAIR
    return HandCategory.HIGH_CARD


@lru_cache(maxsize=1)
def _evaluator() -> Evaluator:
    return Evaluator()


def classify_best_five(cards: list[Card]) -> HandCategory:
    """
    Classify the best five-card hand using treys.

    A straight flush needs the same five cards to be suited and
    consecutive, and the ace-high straight flush is a royal flush.
    """
    if not MIN_HAND_SIZE <= len(cards) <= 7:
        raise ValueError(f"Best-five evaluation needs 5 to 7 cards, got {len(cards)}")

    treys_cards = [c.to_treys() for c in cards]
    rank = _evaluator().evaluate(treys_cards[:2], treys_cards[2:])

    if rank == _ROYAL_FLUSH_RANK:
        return HandCategory.ROYAL_FLUSH
    for upper, category in _TREYS_BANDS:
        if rank <= upper:
            return category
    raise ValueError(f"Unexpected treys rank: {rank}")


def classify(
    cards: Iterable[Card],
    strict: bool = False,
    allow_partial: bool = False,
) -> HandCategory:
    """
    Get the hand category for a set of cards.

    Args:
        cards: Five or more distinct cards
        strict: Evaluate the best five cards with treys instead of the
            whole-set rules of classify_cards()
        allow_partial: Classify fewer than five cards by rank multiples
            only (no straight or flush is possible below five cards)

    Returns:
        The matching HandCategory

    Raises:
        UnderspecifiedHandError: Fewer than five cards and not allow_partial
        DuplicateCardError: The same card appears twice
    """
    cards = list(cards)
    ensure_distinct(cards)

    if len(cards) < MIN_HAND_SIZE:
        if not allow_partial:
            raise UnderspecifiedHandError(len(cards))
        return classify_cards(cards)

    if strict:
        return classify_best_five(cards)
    return classify_cards(cards)


def category_score(category: HandCategory) -> int:
    """
    Ordinal score 1 (high card) to 10.

    Straight flush and royal flush both score 10.
    """
    if category >= HandCategory.STRAIGHT_FLUSH:
        return MAX_SCORE
    return int(category)
