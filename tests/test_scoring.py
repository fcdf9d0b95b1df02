"""Duplicate scoring table checks."""
import pytest

from bridge.bidding import Contract, Strain
from bridge.deal import Seat, Side
from bridge.scoring import (
    contract_trick_score,
    credit_sides,
    score_contract,
    undertrick_penalty,
)


def _contract(level: int, strain: Strain, doubled: bool = False, redoubled: bool = False) -> Contract:
    return Contract(level, strain, Seat.SOUTH, doubled=doubled or redoubled, redoubled=redoubled)


@pytest.mark.parametrize(
    "contract, tricks, vulnerable, expected",
    [
        (_contract(3, Strain.NOTRUMP), 9, False, 400),
        (_contract(3, Strain.NOTRUMP), 10, False, 430),
        (_contract(4, Strain.HEARTS), 10, True, 620),
        (_contract(4, Strain.HEARTS), 10, False, 420),
        (_contract(1, Strain.NOTRUMP), 8, False, 120),
        (_contract(2, Strain.CLUBS), 8, False, 90),
        (_contract(6, Strain.SPADES), 12, False, 980),
        (_contract(6, Strain.SPADES), 12, True, 1430),
        (_contract(7, Strain.NOTRUMP), 13, True, 2220),
    ],
)
def test_made_undoubled(contract, tricks, vulnerable, expected):
    assert score_contract(contract, tricks, vulnerable) == expected


def test_made_doubled_and_redoubled():
    one_spade_x = _contract(1, Strain.SPADES, doubled=True)
    assert score_contract(one_spade_x, 7, False) == 160
    assert score_contract(one_spade_x, 8, False) == 260
    assert score_contract(one_spade_x, 8, True) == 360

    one_spade_xx = _contract(1, Strain.SPADES, redoubled=True)
    assert score_contract(one_spade_xx, 7, False) == 520
    assert score_contract(one_spade_xx, 8, False) == 720

    # Doubling into game.
    assert score_contract(_contract(2, Strain.HEARTS, doubled=True), 8, False) == 470


def test_contract_trick_score():
    assert contract_trick_score(_contract(3, Strain.NOTRUMP)) == 100
    assert contract_trick_score(_contract(2, Strain.DIAMONDS)) == 40
    assert contract_trick_score(_contract(2, Strain.DIAMONDS, doubled=True)) == 80
    assert contract_trick_score(_contract(2, Strain.DIAMONDS, redoubled=True)) == 160


def test_undoubled_undertricks():
    assert score_contract(_contract(4, Strain.SPADES), 8, False) == -100
    assert score_contract(_contract(4, Strain.SPADES), 8, True) == -200


@pytest.mark.parametrize("down, expected", [(1, 100), (2, 300), (3, 500), (4, 800), (5, 1100)])
def test_doubled_nonvulnerable_undertricks(down, expected):
    assert undertrick_penalty(_contract(4, Strain.SPADES, doubled=True), down, False) == expected


def test_doubled_vulnerable_undertricks():
    assert score_contract(_contract(2, Strain.SPADES, doubled=True), 6, True) == -400
    assert score_contract(_contract(4, Strain.SPADES, doubled=True), 7, True) == -600


def test_redoubled_undertricks():
    assert score_contract(_contract(4, Strain.SPADES, redoubled=True), 8, False) == -600
    assert score_contract(_contract(4, Strain.SPADES, redoubled=True), 9, True) == -400


def test_zero_tricks():
    assert score_contract(_contract(7, Strain.NOTRUMP), 0, False) == -650


def test_tricks_out_of_range():
    with pytest.raises(ValueError):
        score_contract(_contract(1, Strain.CLUBS), 14, False)
    with pytest.raises(ValueError):
        score_contract(_contract(1, Strain.CLUBS), -1, False)


def test_credit_sides():
    contract = _contract(3, Strain.NOTRUMP)  # south declares
    assert credit_sides(contract, 400) == {Side.NS: 400, Side.EW: 0}
    assert credit_sides(contract, -100) == {Side.NS: 0, Side.EW: 100}
    assert credit_sides(contract, 0) == {Side.NS: 0, Side.EW: 0}
    east = Contract(2, Strain.HEARTS, Seat.EAST)
    assert credit_sides(east, 110) == {Side.NS: 0, Side.EW: 110}
