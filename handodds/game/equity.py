"""Monte Carlo estimation of final hand categories."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from .cards import (
    Card, DECK_SIZE, DuplicateCardError, RandomSource,
    ensure_distinct, make_rng, partial_shuffle,
)
from .hands import HandCategory, classify, classify_best_five, classify_cards

logger = logging.getLogger(__name__)

BOARD_SIZE = 5
HOLE_SIZE = 2
NUM_CATEGORIES = len(HandCategory)


@dataclass(frozen=True)
class HandDistribution:
    """
    Percentages over hand categories, backed by integer counts.

    counts[i] is the number of trials that ended in category i + 1.
    """
    counts: tuple[int, ...]
    trials: int

    @classmethod
    def from_counts(cls, counts: np.ndarray) -> "HandDistribution":
        return cls(counts=tuple(int(c) for c in counts), trials=int(np.sum(counts)))

    @classmethod
    def exact(cls, category: HandCategory) -> "HandDistribution":
        """All weight on one known category."""
        counts = [0] * NUM_CATEGORIES
        counts[category - 1] = 1
        return cls(counts=tuple(counts), trials=1)

    def count(self, category: HandCategory) -> int:
        return self.counts[category - 1]

    def percentage(self, category: HandCategory) -> float:
        """Share of trials in `category`, 0-100."""
        if self.trials == 0:
            return 0.0
        return self.count(category) / self.trials * 100

    def __getitem__(self, category: HandCategory) -> float:
        return self.percentage(category)

    def as_dict(self) -> dict[HandCategory, float]:
        return {category: self.percentage(category) for category in HandCategory}

    def as_keyed_dict(self) -> dict[str, float]:
        """Percentages keyed by camelCase names ('onePair', ...)."""
        return {category.key: self.percentage(category) for category in HandCategory}

    def total(self) -> float:
        return sum(self.as_dict().values())

    def most_likely(self) -> HandCategory:
        """Category with the most trials (stronger wins ties)."""
        return max(HandCategory, key=lambda c: (self.count(c), c))


@dataclass(frozen=True)
class HandEstimate:
    """Current category and distribution of final categories."""
    current: HandDistribution
    future: HandDistribution
    cards_to_come: int

    @property
    def current_category(self) -> HandCategory:
        return self.current.most_likely()


@dataclass
class EstimatorConfig:
    """Configuration for the Monte Carlo estimator."""
    num_trials: int = 10000
    workers: int = 1               # Thread pool size; 1 runs inline
    strict: bool = False           # Best-five evaluation via treys
    allow_partial: bool = True     # Classify the current hand below 5 cards


class ProbabilityEstimator:
    """
    Estimates what a hand is now and what it may become.

    The current hand is classified exactly from the known cards. The
    future distribution comes from sampling the rest of the board out
    of the remaining deck.
    """

    def __init__(
        self,
        config: Optional[EstimatorConfig] = None,
        rng: RandomSource = None,
    ):
        """
        Initialize estimator.

        Args:
            config: Estimator configuration
            rng: Random generator or seed used for all sampling
        """
        self.config = config or EstimatorConfig()
        self.rng = make_rng(rng)

    def estimate(
        self,
        hole_cards: Iterable[Card],
        community_cards: Iterable[Card],
        remaining_deck: Iterable[Card],
    ) -> HandEstimate:
        """
        Estimate current and future hand categories.

        Args:
            hole_cards: Player's two hole cards
            community_cards: Board cards dealt so far (0-5)
            remaining_deck: Every card not in hole or board

        Returns:
            HandEstimate with current and future distributions
        """
        hole = list(hole_cards)
        board = list(community_cards)
        remaining = list(remaining_deck)
        self._validate(hole, board, remaining)

        known = hole + board
        cards_to_come = BOARD_SIZE - len(board)

        current_category = classify(
            known,
            strict=self.config.strict,
            allow_partial=self.config.allow_partial,
        )
        current = HandDistribution.exact(current_category)

        start = time.perf_counter()
        counts = self._sample(known, remaining, cards_to_come)
        future = HandDistribution.from_counts(counts)
        logger.debug(
            "Estimated %s | %s: %d trials, %d to come, %.3fs",
            " ".join(map(str, hole)),
            " ".join(map(str, board)) or "-",
            future.trials,
            cards_to_come,
            time.perf_counter() - start,
        )

        return HandEstimate(current=current, future=future, cards_to_come=cards_to_come)

    def _validate(self, hole: list[Card], board: list[Card], remaining: list[Card]) -> None:
        if len(hole) != HOLE_SIZE:
            raise ValueError(f"Hole cards must be exactly {HOLE_SIZE} cards, got {len(hole)}")
        if len(board) > BOARD_SIZE:
            raise ValueError(f"Board must be 0-{BOARD_SIZE} cards, got {len(board)}")

        known = hole + board
        ensure_distinct(known)
        ensure_distinct(remaining)

        known_set = set(known)
        for card in remaining:
            if card in known_set:
                raise DuplicateCardError(card)

        if len(known) + len(remaining) != DECK_SIZE:
            raise ValueError(
                f"Known and remaining cards must total {DECK_SIZE}, "
                f"got {len(known) + len(remaining)}"
            )

    def _sample(self, known: list[Card], remaining: list[Card], k: int) -> np.ndarray:
        """Run all trials and return per-category counts."""
        num_trials = self.config.num_trials
        if num_trials <= 0:
            raise ValueError(f"num_trials must be positive, got {num_trials}")

        if k == 0:
            # Every trial classifies the same cards
            counts = np.zeros(NUM_CATEGORIES, dtype=np.int64)
            counts[self._classify(known) - 1] = num_trials
            return counts

        workers = max(1, min(self.config.workers, num_trials))
        if workers == 1:
            return self._run_trials(known, remaining, k, num_trials, self.rng)

        # Independent generators per worker, derived from our own stream
        seed_seq = np.random.SeedSequence(int(self.rng.integers(2**63)))
        rngs = [np.random.default_rng(s) for s in seed_seq.spawn(workers)]
        base, extra = divmod(num_trials, workers)
        sizes = [base + (1 if i < extra else 0) for i in range(workers)]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            partials = list(pool.map(
                lambda args: self._run_trials(known, remaining, k, *args),
                zip(sizes, rngs),
            ))

        return np.sum(partials, axis=0)

    def _run_trials(
        self,
        known: list[Card],
        remaining: list[Card],
        k: int,
        num_trials: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        counts = np.zeros(NUM_CATEGORIES, dtype=np.int64)
        pool = list(remaining)

        for _ in range(num_trials):
            partial_shuffle(pool, k, rng)
            category = self._classify(known + pool[:k])
            counts[category - 1] += 1

        return counts

    def _classify(self, cards: list[Card]) -> HandCategory:
        if self.config.strict:
            return classify_best_five(cards)
        return classify_cards(cards)


def estimate(
    hole_cards: Iterable[Card],
    community_cards: Iterable[Card],
    remaining_deck: Iterable[Card],
    num_trials: int = 10000,
    rng: RandomSource = None,
    strict: bool = False,
    workers: int = 1,
) -> HandEstimate:
    """
    Estimate current and future hand categories.

    Args:
        hole_cards: Player's two hole cards
        community_cards: Board cards dealt so far (0-5)
        remaining_deck: Every card not in hole or board
        num_trials: Number of Monte Carlo trials
        rng: Random generator or seed
        strict: Best-five evaluation instead of whole-set rules
        workers: Threads to spread trials over

    Returns:
        HandEstimate with current and future distributions
    """
    config = EstimatorConfig(num_trials=num_trials, workers=workers, strict=strict)
    return ProbabilityEstimator(config, rng).estimate(
        hole_cards, community_cards, remaining_deck
    )
