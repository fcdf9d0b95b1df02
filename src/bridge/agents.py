"""
Computer players and the generic agent interface.

An agent answers two questions for the seat it drives:

- ``bid(hand, auction, seat) -> Bid`` during the auction,
- ``play(hand, trick, contract, seat) -> Card`` during the play.

``HeuristicAgent`` wraps the rule-based policies in ``bridge.policies`` and is
the default for every non-human seat. ``RandomAgent`` picks uniformly among
legal actions and is useful as a baseline in simulations and tests.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Protocol

from .bidding import Auction, Bid, Contract, PASS
from .deal import Seat
from .deck import Card
from .play import TrickPlay, legal_plays
from .policies import choose_bid, choose_card


class Agent(Protocol):
    """Decision policy for a computer-controlled seat."""

    def bid(self, hand: list[Card], auction: Auction, seat: Seat) -> Bid:
        """Return a call that is legal for ``seat`` in ``auction``."""

    def play(self, hand: list[Card], trick: list[TrickPlay], contract: Contract, seat: Seat) -> Card:
        """Return a card of ``hand`` that is legal on ``trick``."""


@dataclass
class HeuristicAgent:
    """Greedy HCP bidding and cheapest-winner card play."""

    def bid(self, hand: list[Card], auction: Auction, seat: Seat) -> Bid:
        return choose_bid(hand, auction, seat)

    def play(self, hand: list[Card], trick: list[TrickPlay], contract: Contract, seat: Seat) -> Card:
        return choose_card(hand, trick, contract, seat)


@dataclass
class RandomAgent:
    """
    Baseline agent that samples uniformly among legal actions.

    ``pass_prob`` biases the auction towards passing so random auctions end
    quickly instead of climbing to 7NT.

    Usage:
        agent = RandomAgent(seed=42)
        card = agent.play(hand, trick, contract, seat)
    """

    seed: int | None = None
    pass_prob: float = 0.7

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def bid(self, hand: list[Card], auction: Auction, seat: Seat) -> Bid:
        if self._rng.random() < self.pass_prob:
            return PASS
        return self._rng.choice(auction.legal_bids(seat))

    def play(self, hand: list[Card], trick: list[TrickPlay], contract: Contract, seat: Seat) -> Card:
        legal = legal_plays(hand, trick)
        if not legal:
            raise ValueError(f"No legal card available for {seat}")
        return self._rng.choice(legal)


__all__ = ["Agent", "HeuristicAgent", "RandomAgent"]
