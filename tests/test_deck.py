"""Tests for the deck, seats and dealing."""
import random

import pytest

from bridge.deal import (
    Seat,
    Side,
    Vulnerability,
    deal_4p,
    deal_hands,
    dealer_for_deal,
    vulnerability_for_deal,
)
from bridge.deck import Card, Suit, high_card_points, make_deck_52, parse_card, sort_hand, suit_lengths


def _cards(text: str) -> list[Card]:
    return [parse_card(t) for t in text.split()]


def test_deck_52():
    deck = make_deck_52()
    assert len(deck) == 52
    assert len(set(deck)) == 52


def test_parse_card_formats():
    assert parse_card("10♥") == Card(Suit.HEARTS, 8)
    assert parse_card("TH") == Card(Suit.HEARTS, 8)
    assert parse_card("as") == Card(Suit.SPADES, 12)
    assert parse_card("2♣") == Card(Suit.CLUBS, 0)
    assert str(parse_card("QD")) == "Q♦"
    with pytest.raises(ValueError):
        parse_card("1X")
    with pytest.raises(ValueError):
        Card(Suit.SPADES, 13)


def test_high_card_points_and_lengths():
    hand = _cards("AS KS QH JD 2C 3C")
    assert high_card_points(hand) == 10
    lengths = suit_lengths(hand)
    assert lengths == {Suit.SPADES: 2, Suit.HEARTS: 1, Suit.DIAMONDS: 1, Suit.CLUBS: 2}


def test_sort_hand_suit_then_rank_descending():
    hand = sort_hand(_cards("2C AH 3S KS 10D"))
    assert [str(c) for c in hand] == ["K♠", "3♠", "A♥", "10♦", "2♣"]


def test_deal_partitions_full_deck():
    for seed in range(20):
        deal = deal_4p(1, rng=random.Random(seed))
        all_cards = [c for h in deal.hands.values() for c in h]
        assert len(all_cards) == 52
        assert set(all_cards) == set(make_deck_52())
        for seat in Seat:
            assert len(deal.hands[seat]) == 13
            assert tuple(deal.hands[seat]) == deal.original[seat]
            assert deal.hands[seat] == sort_hand(deal.hands[seat])


def test_deal_contiguous_groups():
    deck = make_deck_52()
    rng = random.Random(5)
    shuffled = list(deck)
    random.Random(5).shuffle(shuffled)
    hands = deal_hands(deck=deck, rng=rng)
    assert set(hands[Seat.NORTH]) == set(shuffled[0:13])
    assert set(hands[Seat.WEST]) == set(shuffled[39:52])


def test_deal_needs_52_cards():
    with pytest.raises(ValueError):
        deal_hands(deck=make_deck_52()[:40])


def test_dealer_and_vulnerability_rotation():
    assert dealer_for_deal(1) is Seat.NORTH
    assert dealer_for_deal(2) is Seat.EAST
    assert dealer_for_deal(4) is Seat.WEST
    assert dealer_for_deal(5) is Seat.NORTH
    assert vulnerability_for_deal(1) is Vulnerability.NONE
    assert vulnerability_for_deal(2) is Vulnerability.NS
    assert vulnerability_for_deal(4) is Vulnerability.BOTH
    assert vulnerability_for_deal(8) is Vulnerability.NONE
    assert vulnerability_for_deal(16) is Vulnerability.EW
    assert vulnerability_for_deal(17) is Vulnerability.NONE
    deal = deal_4p(6, rng=random.Random(0))
    assert deal.dealer is Seat.EAST
    assert deal.vulnerability is Vulnerability.EW
    with pytest.raises(ValueError):
        dealer_for_deal(0)


def test_seats_and_sides():
    assert Seat.NORTH.partner is Seat.SOUTH
    assert Seat.EAST.partner is Seat.WEST
    assert Seat.WEST.left is Seat.NORTH
    assert Seat.SOUTH.left is Seat.WEST
    assert Seat.EAST.side is Side.EW
    assert Side.NS.opponents is Side.EW
    assert f"{Seat.SOUTH}" == "south"
    assert Vulnerability.NS.is_vulnerable(Side.NS)
    assert not Vulnerability.NS.is_vulnerable(Side.EW)
    assert Vulnerability.BOTH.is_vulnerable(Side.EW)
    assert not Vulnerability.NONE.is_vulnerable(Side.NS)
