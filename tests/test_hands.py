"""Tests for hand classification."""

import pytest

from handodds.game.cards import DuplicateCardError, parse_cards
from handodds.game.hands import (
    HandCategory, UnderspecifiedHandError, category_score, classify,
    classify_best_five, has_straight,
)


def category(cards: str, **kwargs) -> HandCategory:
    return classify(parse_cards(cards), **kwargs)


class TestClassifyExamples:
    def test_straight_flush(self):
        assert category("2s3s4s5s6s") == HandCategory.STRAIGHT_FLUSH

    def test_wheel_straight_flush(self):
        assert category("As2s3s4s5s") == HandCategory.STRAIGHT_FLUSH

    def test_wheel_straight(self):
        assert category("Ah2d3c4s5h9cKd") == HandCategory.STRAIGHT

    def test_full_house(self):
        assert category("2c2d2h5s5c9dKc") == HandCategory.FULL_HOUSE

    def test_high_card(self):
        assert category("2c5d7h9sJcQdKs") == HandCategory.HIGH_CARD


class TestClassifyCategories:
    def test_royal_flush_reported_as_straight_flush(self):
        assert category("AhKhQhJhTh") == HandCategory.STRAIGHT_FLUSH

    def test_four_of_a_kind(self):
        assert category("9h9d9s9cKh2d3c") == HandCategory.FOUR_OF_A_KIND

    def test_four_of_a_kind_beats_flush(self):
        # Five hearts with the 9h
        assert category("9h9d9s9c2h5hKhJh") == HandCategory.FOUR_OF_A_KIND

    def test_flush(self):
        assert category("2h5h9hJhKh3c4d") == HandCategory.FLUSH

    def test_broadway_straight(self):
        assert category("Ts Jh Qd Kc Ah") == HandCategory.STRAIGHT

    def test_six_card_straight(self):
        assert category("4h5d6c7s8h9d2c") == HandCategory.STRAIGHT

    def test_three_of_a_kind(self):
        assert category("7h7d7cKs2h") == HandCategory.THREE_OF_A_KIND

    def test_two_pair(self):
        assert category("7h7dKcKs2h") == HandCategory.TWO_PAIR

    def test_one_pair(self):
        assert category("7h7dKc3s2h9c") == HandCategory.ONE_PAIR

    def test_no_wrap_around_straight(self):
        # K-A-2-3-4 is not a straight
        assert category("Kh As 2d 3c 4h") == HandCategory.HIGH_CARD


class TestWholeSetRules:
    """Whole-set rules differ from best-five evaluation on 6-7 cards."""

    def test_flush_and_straight_from_different_cards(self):
        # Hearts flush 2-3-5-9-K plus a 2-6 straight using the 4d and 6c
        cards = "2h3h4d5h6c9hKh"
        assert category(cards) == HandCategory.STRAIGHT_FLUSH
        assert category(cards, strict=True) == HandCategory.FLUSH

    def test_three_pairs_fall_through_to_high_card(self):
        cards = "2c2d5s5c9d9hKc"
        assert category(cards) == HandCategory.HIGH_CARD
        assert category(cards, strict=True) == HandCategory.TWO_PAIR

    def test_two_trips_are_three_of_a_kind(self):
        cards = "2c2d2h5s5c5dKc"
        assert category(cards) == HandCategory.THREE_OF_A_KIND
        assert category(cards, strict=True) == HandCategory.FULL_HOUSE

    def test_trips_and_pair_full_house(self):
        assert category("2c2d2h5s5cKd") == HandCategory.FULL_HOUSE


class TestStrict:
    def test_royal_flush(self):
        assert category("AhKhQhJhTh2c3d", strict=True) == HandCategory.ROYAL_FLUSH

    def test_straight_flush(self):
        assert category("9h8h7h6h5h", strict=True) == HandCategory.STRAIGHT_FLUSH

    def test_wheel_straight_flush(self):
        assert category("As2s3s4s5s", strict=True) == HandCategory.STRAIGHT_FLUSH

    @pytest.mark.parametrize("cards,expected", [
        ("9h9d9s9cKh2d3c", HandCategory.FOUR_OF_A_KIND),
        ("2h5h9hJhKh3c4d", HandCategory.FLUSH),
        ("Ah2d3c4s5h9cKd", HandCategory.STRAIGHT),
        ("7h7d7cKs2h", HandCategory.THREE_OF_A_KIND),
        ("7h7dKcKs2h", HandCategory.TWO_PAIR),
        ("7h7dKc3s2h9c", HandCategory.ONE_PAIR),
        ("2c5d7h9sJcQdKs", HandCategory.HIGH_CARD),
    ])
    def test_agrees_on_simple_hands(self, cards, expected):
        assert category(cards, strict=True) == expected
        assert category(cards) == expected

    def test_too_many_cards(self):
        with pytest.raises(ValueError, match="5 to 7"):
            classify_best_five(parse_cards("2c3c4c5c6c7c8c9c"))


class TestClassifyInput:
    def test_underspecified_raises(self):
        with pytest.raises(UnderspecifiedHandError, match="at least 5"):
            category("AsKs")

    def test_underspecified_is_value_error(self):
        with pytest.raises(ValueError):
            category("AsKsQsJs")

    def test_partial_pocket_pair(self):
        assert category("AsAd", allow_partial=True) == HandCategory.ONE_PAIR

    def test_partial_unpaired(self):
        assert category("AsKs", allow_partial=True) == HandCategory.HIGH_CARD

    def test_partial_strict_uses_rank_multiples(self):
        assert category("7s7d7c2h", strict=True, allow_partial=True) == HandCategory.THREE_OF_A_KIND

    def test_duplicate_raises(self):
        with pytest.raises(DuplicateCardError):
            category("AsAsKdQc2h")

    def test_accepts_any_iterable(self):
        assert classify(iter(parse_cards("2s3s4s5s6s"))) == HandCategory.STRAIGHT_FLUSH


class TestHasStraight:
    def test_wheel(self):
        assert has_straight([14, 2, 3, 4, 5])

    def test_broadway(self):
        assert has_straight([10, 11, 12, 13, 14])

    def test_gap(self):
        assert not has_straight([2, 3, 4, 6, 7, 8])

    def test_duplicates_ignored(self):
        assert has_straight([5, 5, 6, 7, 8, 9])

    def test_too_few(self):
        assert not has_straight([2, 3, 4, 5])


class TestHandCategory:
    def test_ordering(self):
        assert HandCategory.HIGH_CARD < HandCategory.ONE_PAIR < HandCategory.ROYAL_FLUSH

    def test_label(self):
        assert HandCategory.TWO_PAIR.label == "Two Pair"
        assert HandCategory.THREE_OF_A_KIND.label == "Three of a Kind"

    def test_keys(self):
        assert {c.key for c in HandCategory} == {
            "highCard", "onePair", "twoPair", "threeOfAKind", "straight",
            "flush", "fullHouse", "fourOfAKind", "straightFlush", "royalFlush",
        }

    def test_from_key(self):
        assert HandCategory.from_key("fullHouse") == HandCategory.FULL_HOUSE
        with pytest.raises(ValueError):
            HandCategory.from_key("fiveOfAKind")


class TestCategoryScore:
    def test_high_card_is_one(self):
        assert category_score(HandCategory.HIGH_CARD) == 1

    def test_four_of_a_kind_is_eight(self):
        assert category_score(HandCategory.FOUR_OF_A_KIND) == 8

    def test_straight_and_royal_flush_top_score(self):
        assert category_score(HandCategory.STRAIGHT_FLUSH) == 10
        assert category_score(HandCategory.ROYAL_FLUSH) == 10
