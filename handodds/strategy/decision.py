"""
Heuristic betting decisions.

Blends made-hand strength, table position and stack depth into one
effective strength and compares it with the pot odds on offer:
- Unopened pots are raised when the blend is strong enough, else checked
- Facing a bet, a blend comfortably above the pot odds calls, and
  raises when it is also strong and the stack is deep
- Otherwise the hand folds, except for an occasional bluff raise

The heuristic is deliberately simple; every constant lives in
DecisionConfig.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Optional

from handodds.game.cards import Card, RandomSource, make_rng
from handodds.game.hands import category_score, classify

logger = logging.getLogger(__name__)


class Action(Enum):
    """Betting actions the heuristic can choose."""
    FOLD = auto()
    CHECK = auto()
    CALL = auto()
    RAISE = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Position(Enum):
    """Named seats, from the button backwards plus the blinds."""
    DEALER = auto()
    CUTOFF = auto()
    HIJACK = auto()
    LOJACK = auto()
    BIG_BLIND = auto()
    SMALL_BLIND = auto()
    NORMAL = auto()

    @classmethod
    def from_string(cls, s: str) -> "Position":
        """Parse position from names like 'dealer', 'BTN', 'smallBlind'."""
        # smallBlind -> SMALL BLIND
        key = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", s.strip())
        key = key.upper().replace("_", " ").replace("-", " ")

        mapping = {
            "DEALER": cls.DEALER,
            "BUTTON": cls.DEALER,
            "BTN": cls.DEALER,
            "CUTOFF": cls.CUTOFF,
            "CUT OFF": cls.CUTOFF,
            "CO": cls.CUTOFF,
            "HIJACK": cls.HIJACK,
            "HJ": cls.HIJACK,
            "LOJACK": cls.LOJACK,
            "LJ": cls.LOJACK,
            "BIG BLIND": cls.BIG_BLIND,
            "BB": cls.BIG_BLIND,
            "SMALL BLIND": cls.SMALL_BLIND,
            "SB": cls.SMALL_BLIND,
            "NORMAL": cls.NORMAL,
        }
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown position: {s}")

    def __str__(self) -> str:
        return self.name


def _default_position_strength() -> dict[Position, float]:
    return {
        Position.DEALER: 1.0,
        Position.CUTOFF: 0.9,
        Position.HIJACK: 0.8,
        Position.LOJACK: 0.7,
        Position.BIG_BLIND: 0.4,
        Position.SMALL_BLIND: 0.3,
        Position.NORMAL: 0.6,
    }


@dataclass
class DecisionConfig:
    """Weights, thresholds and sizings for the decision heuristic."""
    # Effective strength blend
    hand_weight: float = 0.6
    position_weight: float = 0.3
    stack_weight: float = 0.1

    # Thresholds
    open_raise_threshold: float = 0.5     # Raise an unopened pot above this
    value_raise_threshold: float = 0.6    # Raise over a bet above this
    pot_odds_margin: float = 1.2          # Continue when strength > pot odds * margin
    min_stack_to_call: float = 2.0        # Raise over a bet only deeper than this
    bluff_threshold: float = 0.3          # Never bluff at or below this
    bluff_probability: float = 0.2

    # Raise sizes (as fraction of pot)
    open_raise_fraction: float = 0.8      # Scaled by effective strength
    value_raise_fraction: float = 1.2     # Scaled by effective strength
    bluff_raise_fraction: float = 0.5

    position_strength: dict[Position, float] = field(
        default_factory=_default_position_strength
    )
    max_score: int = 10
    strict: bool = False                  # Best-five hand evaluation


@dataclass
class Player:
    """The deciding player's view of their own seat."""
    hole_cards: list[Card]
    chips: int
    current_bet: int = 0
    position: Position = Position.NORMAL
    name: str = "Hero"


@dataclass
class BettingContext:
    """Public betting state at the moment of the decision."""
    community_cards: list[Card] = field(default_factory=list)
    pot: int = 0
    current_bet: int = 0
    min_raise: int = 0


@dataclass
class Decision:
    """A chosen action and the numbers behind it."""
    action: Action
    amount: Optional[int] = None   # Raise size; None for other actions
    hand_strength: float = 0.0
    effective_strength: float = 0.0
    pot_odds: float = 0.0
    reason: str = ""

    def __str__(self) -> str:
        if self.amount is not None:
            return f"{self.action} {self.amount}"
        return str(self.action)


def clamp(x: float, lo: float, hi: float) -> float:
    """Limit x to [lo, hi]; hi wins if the bounds cross."""
    return min(max(x, lo), hi)


def pot_odds(call_amount: float, pot: float) -> float:
    """Share of the final pot that a call costs (0 if nothing to call)."""
    if call_amount <= 0:
        return 0.0
    return call_amount / (pot + call_amount)


def hand_strength(
    hole_cards: Iterable[Card],
    community_cards: Iterable[Card],
    config: Optional[DecisionConfig] = None,
) -> float:
    """
    Normalized made-hand strength in (0, 1].

    Below five known cards (preflop) only pairs and sets count.
    """
    config = config or DecisionConfig()
    category = classify(
        list(hole_cards) + list(community_cards),
        strict=config.strict,
        allow_partial=True,
    )
    return category_score(category) / config.max_score


class DecisionHeuristic:
    """
    Chooses fold/check/call/raise from hand strength and betting context.

    Deterministic apart from the bluff branch, which draws from the
    injected random generator.
    """

    def __init__(
        self,
        config: Optional[DecisionConfig] = None,
        rng: RandomSource = None,
    ):
        """
        Initialize heuristic.

        Args:
            config: Heuristic constants
            rng: Random generator or seed for bluffing
        """
        self.config = config or DecisionConfig()
        self.rng = make_rng(rng)

    def effective_strength(
        self,
        strength: float,
        position: Position,
        stack_to_call: float,
    ) -> float:
        """Weighted blend of hand, position and stack pressure."""
        cfg = self.config
        position_strength = cfg.position_strength.get(
            position, cfg.position_strength[Position.NORMAL]
        )
        # No chips behind: the stack term counts as 1
        stack_pressure = 1 / stack_to_call if stack_to_call > 0 else 1.0
        return (
            cfg.hand_weight * strength
            + cfg.position_weight * position_strength
            + cfg.stack_weight * stack_pressure
        )

    def decide(self, player: Player, context: BettingContext) -> Decision:
        """
        Decide an action for `player`.

        Args:
            player: Deciding player (hole cards, chips, bet, position)
            context: Board, pot, bet to match and minimum raise

        Returns:
            Decision with action, raise amount and diagnostics
        """
        cfg = self.config

        strength = hand_strength(player.hole_cards, context.community_cards, cfg)
        call_amount = max(context.current_bet - player.current_bet, 0)
        odds = pot_odds(call_amount, context.pot)
        stack_to_call = player.chips / max(call_amount, 1)
        effective = self.effective_strength(strength, player.position, stack_to_call)

        def make(action: Action, amount: Optional[float] = None, reason: str = "") -> Decision:
            return Decision(
                action=action,
                amount=None if amount is None else int(amount),
                hand_strength=strength,
                effective_strength=effective,
                pot_odds=odds,
                reason=reason,
            )

        def raise_to(amount: float) -> float:
            return clamp(math.floor(amount), context.min_raise, player.chips)

        if call_amount == 0:
            if effective > cfg.open_raise_threshold:
                decision = make(
                    Action.RAISE,
                    raise_to(context.pot * effective * cfg.open_raise_fraction),
                    f"Strength {effective:.2f} above {cfg.open_raise_threshold}",
                )
            else:
                decision = make(Action.CHECK, reason=f"Strength {effective:.2f} too weak to bet")

        elif effective > odds * cfg.pot_odds_margin:
            if effective > cfg.value_raise_threshold and stack_to_call > cfg.min_stack_to_call:
                decision = make(
                    Action.RAISE,
                    raise_to(context.pot * effective * cfg.value_raise_fraction),
                    f"Strength {effective:.2f} and deep stack",
                )
            else:
                decision = make(
                    Action.CALL,
                    reason=f"Strength {effective:.2f} beats pot odds {odds:.2f}",
                )

        elif effective > cfg.bluff_threshold and self.rng.random() < cfg.bluff_probability:
            decision = make(
                Action.RAISE,
                raise_to(context.pot * cfg.bluff_raise_fraction),
                "Bluff",
            )

        else:
            decision = make(Action.FOLD, reason=f"Pot odds {odds:.2f} too high")

        logger.debug(
            "%s (%s): %s, strength=%.2f effective=%.2f odds=%.2f",
            player.name,
            player.position,
            decision,
            strength,
            effective,
            odds,
        )
        return decision


def decide(
    player: Player,
    context: BettingContext,
    config: Optional[DecisionConfig] = None,
    rng: RandomSource = None,
) -> Decision:
    """Decide an action with a one-off DecisionHeuristic."""
    return DecisionHeuristic(config, rng).decide(player, context)
