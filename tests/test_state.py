"""Tests for street-by-street hand progression."""

import pytest

from handodds.game.cards import (
    DeckExhaustedError, DuplicateCardError, exclude, ordered_deck, parse_cards,
)
from handodds.game.hands import HandCategory
from handodds.game.state import (
    HandState, Street, deal_flop, deal_initial, deal_river, deal_turn,
    next_street, override_card,
)


@pytest.fixture
def preflop(rng, fast_estimator):
    return deal_initial(rng, fast_estimator)


def assert_accounted(state: HandState):
    cards = state.placed_cards + state.deck
    assert len(cards) == 52
    assert len(set(cards)) == 52


class TestStreet:
    def test_cards_to_come(self):
        assert Street.PREFLOP.cards_to_come == 5
        assert Street.FLOP.cards_to_come == 2
        assert Street.TURN.cards_to_come == 1
        assert Street.RIVER.cards_to_come == 0

    def test_from_board_size(self):
        assert Street.from_board_size(4) is Street.TURN
        with pytest.raises(ValueError):
            Street.from_board_size(2)

    def test_from_string(self):
        assert Street.from_string("pre-flop") is Street.PREFLOP
        assert Street.from_string(" River ") is Street.RIVER
        with pytest.raises(ValueError):
            Street.from_string("showdown")

    def test_text(self):
        assert Street.FLOP.title == "Flop odds"
        assert Street.PREFLOP.description == "Based on the 5 cards to come"
        assert Street.TURN.description == "Based on the 1 card to come"
        assert Street.RIVER.description == "Final odds"


class TestDealInitial:
    def test_deals_two_hole_cards(self, preflop):
        assert len(preflop.hole_cards) == 2
        assert preflop.community_cards == ()
        assert len(preflop.deck) == 50
        assert preflop.street is Street.PREFLOP
        assert_accounted(preflop)

    def test_estimates_five_to_come(self, preflop):
        assert preflop.estimate.cards_to_come == 5
        assert preflop.estimate.future.total() == pytest.approx(100.0)

    def test_seeded_deal_reproducible(self, fast_estimator):
        a = deal_initial(42, fast_estimator)
        b = deal_initial(42, fast_estimator)
        assert a.hole_cards == b.hole_cards
        assert a.deck == b.deck


class TestDealStreets:
    def test_flop(self, preflop, fast_estimator):
        flop = deal_flop(preflop, fast_estimator)

        assert flop.street is Street.FLOP
        assert flop.community_cards == preflop.deck[:3]
        assert flop.deck == preflop.deck[3:]
        assert flop.hole_cards == preflop.hole_cards
        assert flop.estimate.cards_to_come == 2
        assert_accounted(flop)

    def test_input_state_unchanged(self, preflop, fast_estimator):
        before = (preflop.hole_cards, preflop.community_cards, preflop.deck)
        deal_flop(preflop, fast_estimator)
        assert (preflop.hole_cards, preflop.community_cards, preflop.deck) == before

    def test_full_hand(self, preflop, fast_estimator):
        turn = deal_turn(deal_flop(preflop, fast_estimator), fast_estimator)
        river = deal_river(turn, fast_estimator)

        assert turn.street is Street.TURN
        assert len(turn.community_cards) == 4
        assert river.street is Street.RIVER
        assert len(river.community_cards) == 5
        assert len(river.deck) == 45
        assert river.community_cards[:4] == turn.community_cards
        assert_accounted(river)

        assert river.estimate.cards_to_come == 0
        assert river.estimate.future.as_dict() == river.estimate.current.as_dict()

    def test_out_of_order(self, preflop, fast_estimator):
        with pytest.raises(ValueError, match="turn"):
            deal_turn(preflop, fast_estimator)

        flop = deal_flop(preflop, fast_estimator)
        with pytest.raises(ValueError):
            deal_flop(flop, fast_estimator)
        with pytest.raises(ValueError):
            deal_river(flop, fast_estimator)

    def test_short_deck(self, preflop, fast_estimator):
        turn = deal_turn(deal_flop(preflop, fast_estimator), fast_estimator)
        empty = HandState(
            hole_cards=turn.hole_cards,
            community_cards=turn.community_cards,
            deck=(),
            estimate=turn.estimate,
        )
        with pytest.raises(DeckExhaustedError):
            deal_river(empty, fast_estimator)


class TestNextStreet:
    def test_walks_streets(self, preflop, rng, fast_estimator):
        state = preflop
        streets = []
        for _ in range(3):
            state = next_street(state, rng, fast_estimator)
            streets.append(state.street)
        assert streets == [Street.FLOP, Street.TURN, Street.RIVER]

    def test_new_hand_after_river(self, preflop, rng, fast_estimator):
        state = preflop
        for _ in range(4):
            state = next_street(state, rng, fast_estimator)
        assert state.street is Street.PREFLOP
        assert_accounted(state)


class TestOverrideCard:
    def test_override_hole(self, preflop, rng, fast_estimator):
        card = next(c for c in preflop.deck)
        state = override_card(preflop, "hole", 0, card, rng, fast_estimator)

        assert state.hole_cards[0] == card
        assert state.hole_cards[1] == preflop.hole_cards[1]
        assert card not in state.deck
        assert preflop.hole_cards[0] in state.deck
        assert_accounted(state)

    def test_override_reestimates(self, rng, fast_estimator):
        hole = parse_cards("As2d")
        board = parse_cards("Ah7c9s")
        deck = tuple(exclude(ordered_deck(), hole + board))
        state = HandState(
            hole_cards=tuple(hole),
            community_cards=tuple(board),
            deck=deck,
            estimate=fast_estimator.estimate(hole, board, deck),
        )
        assert state.estimate.current_category == HandCategory.ONE_PAIR

        state = override_card(state, "hole", 1, parse_cards("Ad")[0], rng, fast_estimator)
        assert state.estimate.current_category == HandCategory.THREE_OF_A_KIND

        state = override_card(state, "board", 2, parse_cards("Ac")[0], rng, fast_estimator)
        assert state.community_cards == tuple(parse_cards("Ah7cAc"))
        assert state.estimate.current_category == HandCategory.FOUR_OF_A_KIND
        assert parse_cards("9s")[0] in state.deck
        assert_accounted(state)

    def test_duplicate_rejected(self, rng, fast_estimator):
        flop = deal_flop(deal_initial(rng, fast_estimator), fast_estimator)
        with pytest.raises(DuplicateCardError):
            override_card(flop, "board", 0, flop.hole_cards[0], rng, fast_estimator)

    def test_same_card_allowed(self, preflop, rng, fast_estimator):
        state = override_card(preflop, "hole", 1, preflop.hole_cards[1], rng, fast_estimator)
        assert state.hole_cards == preflop.hole_cards
        assert_accounted(state)

    def test_bad_slot(self, preflop, rng):
        with pytest.raises(ValueError, match="slot"):
            override_card(preflop, "river", 0, preflop.deck[0], rng)

    def test_bad_index(self, preflop, rng):
        with pytest.raises(ValueError, match="index"):
            override_card(preflop, "board", 0, preflop.deck[0], rng)
