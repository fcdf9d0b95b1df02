"""
Phase-transition notifications emitted by a ``Session``.

Events are immutable records; nothing here is persisted. A presentation layer
subscribes to an ``EventBus`` and reacts (render, schedule the next AI turn, ...).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

from .bidding import Bid, Contract
from .deal import Seat, Side, Vulnerability
from .deck import Card
from .play import TrickPlay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DealStarted:
    deal_number: int
    dealer: Seat
    vulnerability: Vulnerability


@dataclass(frozen=True)
class BidMade:
    seat: Seat
    bid: Bid


@dataclass(frozen=True)
class AuctionResolved:
    """End of the auction. ``contract`` is None when the deal was passed out."""

    contract: Contract | None

    @property
    def passed_out(self) -> bool:
        return self.contract is None


@dataclass(frozen=True)
class CardPlayed:
    seat: Seat
    card: Card


@dataclass(frozen=True)
class TrickCompleted:
    trick_number: int
    winner: Seat
    plays: tuple[TrickPlay, ...]

    @property
    def side(self) -> Side:
        return self.winner.side


@dataclass(frozen=True)
class HandCompleted:
    """
    Thirteen tricks played. ``score`` is signed from the declaring side's point
    of view; ``credit`` is what each side adds to its running total.
    """

    contract: Contract
    declarer_tricks: int
    score: int
    credit: dict[Side, int]


@dataclass(frozen=True)
class ScoreUpdated:
    ns: int
    ew: int


Event = Union[DealStarted, BidMade, AuctionResolved, CardPlayed, TrickCompleted, HandCompleted, ScoreUpdated]
Listener = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe; listeners run in subscription order."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def publish(self, event: Event) -> None:
        logger.debug("event %s", event)
        for listener in list(self._listeners):
            listener(event)


__all__ = [
    "AuctionResolved",
    "BidMade",
    "CardPlayed",
    "DealStarted",
    "Event",
    "EventBus",
    "HandCompleted",
    "Listener",
    "ScoreUpdated",
    "TrickCompleted",
]
