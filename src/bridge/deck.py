"""
Bridge deck: 52 cards, 4 suits × 13 ranks.
Ranks are indexed 0..12 (2 lowest, Ace highest). High-card points: A=4, K=3, Q=2, J=1.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable


class Suit(IntEnum):
    """Spades, Hearts, Diamonds, Clubs. Order used to sort hands (spades first)."""
    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


SUIT_SYMBOLS = "♠♥♦♣"
SUIT_LETTERS = "SHDC"

RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
RANK_JACK = 9
RANK_QUEEN = 10
RANK_KING = 11
RANK_ACE = 12

HCP_BY_RANK = {RANK_ACE: 4, RANK_KING: 3, RANK_QUEEN: 2, RANK_JACK: 1}


@dataclass(frozen=True)
class Card:
    """A single card: suit + rank index (0 = 2 .. 12 = Ace)."""

    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if not 0 <= self.rank <= 12:
            raise ValueError(f"Rank index out of range: {self.rank}")
        # Normalise plain ints so equality and hashing match Suit members.
        object.__setattr__(self, "suit", Suit(self.suit))

    @property
    def rank_label(self) -> str:
        return RANKS[self.rank]

    def hcp(self) -> int:
        return HCP_BY_RANK.get(self.rank, 0)

    def __str__(self) -> str:
        return f"{RANKS[self.rank]}{self.suit.symbol}"

    def __repr__(self) -> str:
        return str(self)


def parse_card(text: str) -> Card:
    """
    Parse "10♥", "TH", "10h", "As", "Q♠" ... into a Card.
    Suit is the last character (symbol or letter), rank is the rest.
    """
    s = text.strip()
    if len(s) < 2:
        raise ValueError(f"Cannot parse card: {text!r}")
    suit_ch = s[-1].upper()
    rank_str = s[:-1].upper()
    if suit_ch in SUIT_SYMBOLS:
        suit = Suit(SUIT_SYMBOLS.index(suit_ch))
    elif suit_ch in SUIT_LETTERS:
        suit = Suit(SUIT_LETTERS.index(suit_ch))
    else:
        raise ValueError(f"Unknown suit in card: {text!r}")
    if rank_str == "T":
        rank_str = "10"
    if rank_str not in RANKS:
        raise ValueError(f"Unknown rank in card: {text!r}")
    return Card(suit, RANKS.index(rank_str))


def make_deck_52() -> list[Card]:
    """Build a full 52-card deck, suit by suit (spades first), ranks ascending."""
    return [Card(s, r) for s in Suit for r in range(13)]


def hand_sort_key(card: Card) -> tuple[int, int]:
    """Suit order (♠ ♥ ♦ ♣), then high to low within the suit."""
    return (int(card.suit), -card.rank)


def sort_hand(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=hand_sort_key)


def high_card_points(hand: Iterable[Card]) -> int:
    return sum(c.hcp() for c in hand)


def suit_lengths(hand: Iterable[Card]) -> dict[Suit, int]:
    """Number of cards held in every suit (zero-length suits included)."""
    lengths = {s: 0 for s in Suit}
    for c in hand:
        lengths[c.suit] += 1
    return lengths


def cards_of_suit(cards: Iterable[Card], suit: Suit) -> list[Card]:
    return [c for c in cards if c.suit == suit]
