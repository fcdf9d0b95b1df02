"""
Seats, partnerships, dealer/vulnerability rotation and the deal itself.
Seats rotate clockwise: North -> East -> South -> West -> North.
Deal n: dealer = seats[(n-1) % 4], vulnerability = VULNERABILITY_TABLE[(n-1) % 16].
"""
from __future__ import annotations

import random
from enum import Enum, IntEnum
from typing import NamedTuple

from .deck import Card, make_deck_52, sort_hand


class Side(str, Enum):
    """Partnerships: North/South and East/West."""
    NS = "ns"
    EW = "ew"

    @property
    def opponents(self) -> "Side":
        return Side.EW if self is Side.NS else Side.NS


class Seat(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def side(self) -> Side:
        return Side.NS if self in (Seat.NORTH, Seat.SOUTH) else Side.EW

    @property
    def partner(self) -> "Seat":
        return Seat((self + 2) % 4)

    @property
    def left(self) -> "Seat":
        """Next seat in rotation (the player on this seat's left)."""
        return Seat((self + 1) % 4)

    def offset(self, n: int) -> "Seat":
        return Seat((self + n) % 4)

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


class Vulnerability(str, Enum):
    NONE = "none"
    NS = "ns"
    EW = "ew"
    BOTH = "both"

    def is_vulnerable(self, side: Side) -> bool:
        if self is Vulnerability.BOTH:
            return True
        if self is Vulnerability.NONE:
            return False
        return self.value == side.value


# Standard 16-board rotation.
VULNERABILITY_TABLE = (
    Vulnerability.NONE, Vulnerability.NS, Vulnerability.EW, Vulnerability.BOTH,
    Vulnerability.NS, Vulnerability.EW, Vulnerability.BOTH, Vulnerability.NONE,
    Vulnerability.EW, Vulnerability.BOTH, Vulnerability.NONE, Vulnerability.NS,
    Vulnerability.BOTH, Vulnerability.NONE, Vulnerability.NS, Vulnerability.EW,
)


def dealer_for_deal(deal_number: int) -> Seat:
    if deal_number < 1:
        raise ValueError(f"Deal numbers start at 1, got {deal_number}")
    return Seat((deal_number - 1) % 4)


def vulnerability_for_deal(deal_number: int) -> Vulnerability:
    if deal_number < 1:
        raise ValueError(f"Deal numbers start at 1, got {deal_number}")
    return VULNERABILITY_TABLE[(deal_number - 1) % 16]


class Deal(NamedTuple):
    """
    One board. ``hands`` are mutable lists (cards are removed during play);
    ``original`` keeps the untouched 13-card hands for the end-of-hand reveal.
    """
    number: int
    dealer: Seat
    vulnerability: Vulnerability
    hands: dict[Seat, list[Card]]
    original: dict[Seat, tuple[Card, ...]]


def deal_hands(
    deck: list[Card] | None = None,
    rng: random.Random | None = None,
) -> dict[Seat, list[Card]]:
    """
    Shuffle and split the pack into four contiguous groups of 13:
    cards 0..12 to North, 13..25 to East, 26..38 to South, 39..51 to West.
    Each hand is sorted by suit then rank (high to low).
    """
    if deck is None:
        deck = make_deck_52()
    if rng is None:
        rng = random.Random()
    if len(deck) != 52:
        raise ValueError(f"A bridge deal needs 52 cards, got {len(deck)}")
    deck = list(deck)
    rng.shuffle(deck)
    return {seat: sort_hand(deck[i * 13:(i + 1) * 13]) for i, seat in enumerate(Seat)}


def deal_4p(
    deal_number: int = 1,
    deck: list[Card] | None = None,
    rng: random.Random | None = None,
) -> Deal:
    """Deal board ``deal_number`` with its dealer and vulnerability."""
    hands = deal_hands(deck=deck, rng=rng)
    return Deal(
        number=deal_number,
        dealer=dealer_for_deal(deal_number),
        vulnerability=vulnerability_for_deal(deal_number),
        hands=hands,
        original={seat: tuple(h) for seat, h in hands.items()},
    )
