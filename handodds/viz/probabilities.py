"""Terminal display of hand probabilities."""

from typing import Iterable, Optional

from rich.columns import Columns
from rich.console import Console
from rich.table import Table
from rich.text import Text

from handodds.game.cards import Card, Suit
from handodds.game.equity import HandDistribution, HandEstimate
from handodds.game.hands import HandCategory
from handodds.game.state import Street
from handodds.strategy.decision import Action, Decision

RED_SUITS = (Suit.HEARTS, Suit.DIAMONDS)

ACTION_COLORS = {
    Action.FOLD: "red",
    Action.CHECK: "grey50",
    Action.CALL: "blue",
    Action.RAISE: "green",
}


def format_cards(cards: Iterable[Card], pretty: bool = True) -> Text:
    """Cards as styled text, red suits in red."""
    text = Text()
    for i, card in enumerate(cards):
        if i:
            text.append(" ")
        label = card.pretty if pretty else str(card)
        text.append(label, style="bold red" if card.suit in RED_SUITS else "bold")
    if not text.plain:
        text.append("-", style="dim")
    return text


def _percent_style(value: float) -> str:
    if value >= 50:
        return "bold green"
    if value >= 10:
        return "yellow"
    if value > 0:
        return "white"
    return "grey50"


def distribution_table(distribution: HandDistribution, title: str) -> Table:
    """One row per category, strongest first."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Hand", style="cyan")
    table.add_column("Chance", justify="right")

    for category in sorted(HandCategory, reverse=True):
        value = distribution.percentage(category)
        table.add_row(category.label, Text(f"{value:.1f}%", style=_percent_style(value)))

    return table


def format_decision(decision: Decision) -> Text:
    color = ACTION_COLORS.get(decision.action, "white")
    text = Text(str(decision).upper(), style=f"bold {color}")
    if decision.reason:
        text.append(f"  ({decision.reason})", style="dim")
    return text


class ProbabilityDisplay:
    """Renders current and future hand probabilities with rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show(self, estimate: HandEstimate, street: Optional[Street] = None) -> None:
        """Print the street heading and both probability tables."""
        if street is None:
            street = Street.from_board_size(5 - estimate.cards_to_come)

        self.console.print(f"[bold]{street.title}[/]")
        self.console.print(f"[dim]{street.description}[/]")
        self.console.print(Columns([
            distribution_table(estimate.current, "Current hand"),
            distribution_table(estimate.future, "Possible final hands"),
        ]))

    def show_cards(self, hole_cards: Iterable[Card], community_cards: Iterable[Card]) -> None:
        self.console.print(Text("Hand:  ", style="bold") + format_cards(hole_cards))
        self.console.print(Text("Board: ", style="bold") + format_cards(community_cards))

    def show_decision(self, decision: Decision) -> None:
        self.console.print(Text("Action: ", style="bold") + format_decision(decision))
