"""Card, deck and shuffling primitives."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Union

import numpy as np
from treys import Card as TreysCard


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits, numbered in canonical deck order."""
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "h", 1: "d", 2: "c", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}

SUIT_SYMBOL = {0: "♥", 1: "♦", 2: "♣", 3: "♠"}

DECK_SIZE = 52

RandomSource = Union[None, int, np.random.Generator]


class DeckExhaustedError(ValueError):
    """Raised when more cards are requested than a deck holds."""


class DuplicateCardError(ValueError):
    """Raised when the same card is placed twice."""

    def __init__(self, card: "Card"):
        super().__init__(f"Duplicate card: {card}")
        self.card = card


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def pretty(self) -> str:
        """Card with a suit symbol, e.g. '10♥'."""
        rank = "10" if self.rank == Rank.TEN else RANK_STR[self.rank]
        return f"{rank}{SUIT_SYMBOL[self.suit]}"

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '10h', '2c'."""
        s = s.strip()
        if len(s) == 3 and s[:2] == "10":
            s = "T" + s[2]
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=Rank(STR_RANK[rank_char]), suit=Suit(STR_SUIT[suit_char]))

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


def make_rng(seed: RandomSource = None) -> np.random.Generator:
    """
    Get a numpy random generator.

    Accepts an existing generator (returned as-is), an integer seed,
    or None for fresh OS entropy.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def parse_cards(cards: Union[str, Iterable[Union[str, Card]]]) -> list[Card]:
    """
    Parse cards from a string or an iterable of strings/cards.

    Examples:
        "AsKh" -> [As, Kh]
        "As Kh 10d" -> [As, Kh, Td]
        ["As", Card(Rank.KING, Suit.HEARTS)] -> [As, Kh]
    """
    if isinstance(cards, str):
        text = cards.replace(",", " ").replace("10", "T")
        tokens = []
        for chunk in text.split():
            if len(chunk) % 2 != 0:
                raise ValueError(f"Invalid card string: {chunk}")
            tokens.extend(chunk[i:i + 2] for i in range(0, len(chunk), 2))
        return [Card.from_string(t) for t in tokens]

    return [c if isinstance(c, Card) else Card.from_string(c) for c in cards]


def ensure_distinct(cards: Iterable[Card]) -> None:
    """Raise DuplicateCardError if any card appears more than once."""
    seen = set()
    for card in cards:
        if card in seen:
            raise DuplicateCardError(card)
        seen.add(card)


def ordered_deck() -> list[Card]:
    """All 52 cards, suit-major and rank-minor."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle(cards: list[Card], rng: RandomSource = None) -> list[Card]:
    """
    Shuffle cards in place with Fisher-Yates.

    Walks from the last index down to 1, swapping each position with a
    uniformly chosen index at or below it.

    Returns:
        The same list, for chaining
    """
    rng = make_rng(rng)
    for i in range(len(cards) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def partial_shuffle(cards: list[Card], k: int, rng: RandomSource = None) -> list[Card]:
    """
    Run only the first k steps of a Fisher-Yates shuffle in place.

    Afterwards cards[:k] is a uniformly random ordered sample of the
    input, whatever order the input was in. The tail is left partly
    shuffled.

    Args:
        cards: Cards to sample from (mutated)
        k: Number of leading positions to randomize
        rng: Random source

    Returns:
        The same list, for chaining
    """
    n = len(cards)
    if k > n:
        raise DeckExhaustedError(f"Cannot sample {k} cards, only {n} remaining")
    rng = make_rng(rng)
    for i in range(k):
        j = int(rng.integers(i, n))
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def exclude(cards: Iterable[Card], used: Iterable[Card]) -> list[Card]:
    """Cards from `cards`, in order, that are not in `used`."""
    dead = set(used)
    return [c for c in cards if c not in dead]


class Deck:
    """
    An ordered deck of remaining cards.

    Cards leave the deck only by dealing or removal, and both are
    tracked in `dealt`, so a deck built full always holds
    len(deck) + len(deck.dealt) == 52.
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self.cards: list[Card] = []
        self.dealt: list[Card] = []
        if cards is None:
            self.reset()
        else:
            self.cards = list(cards)
            ensure_distinct(self.cards)

    @classmethod
    def create(cls, rng: RandomSource = None) -> "Deck":
        """A full 52-card deck in uniformly random order."""
        deck = cls()
        deck.shuffle(rng)
        return deck

    def reset(self) -> None:
        """Reset deck to full 52 cards in canonical order."""
        self.cards = ordered_deck()
        self.dealt = []

    def shuffle(self, rng: RandomSource = None) -> None:
        """Shuffle the remaining cards."""
        shuffle(self.cards, rng)

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards from the top of the deck."""
        if n > len(self.cards):
            raise DeckExhaustedError(
                f"Cannot deal {n} cards, only {len(self.cards)} remaining"
            )
        dealt = self.cards[:n]
        self.cards = self.cards[n:]
        self.dealt.extend(dealt)
        return dealt

    def remove(self, cards: Iterable[Card]) -> None:
        """Remove specific cards from the deck."""
        for card in cards:
            if card in self.cards:
                self.cards.remove(card)
                self.dealt.append(card)

    def exclude(self, used: Iterable[Card]) -> "Deck":
        """New deck holding the remaining cards not in `used`."""
        return Deck(exclude(self.cards, used))

    def copy(self) -> "Deck":
        deck = Deck(self.cards)
        deck.dealt = list(self.dealt)
        return deck

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards


def create_deck(rng: RandomSource = None) -> Deck:
    """Create a shuffled 52-card deck."""
    return Deck.create(rng)
