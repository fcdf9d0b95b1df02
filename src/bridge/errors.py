"""
Exception types raised by the bridge engine.

Two families:

- ``InvalidBid`` / ``InvalidCard``: an action submitted from outside the
  engine breaks the rules. The action is rejected, nothing is mutated and
  the caller is expected to ask again.
- ``PreconditionViolation``: the engine was driven in a way that can only
  come from a programming error (wrong phase, incomplete trick evaluated,
  a policy returning an illegal action, ...).
"""
from __future__ import annotations

from typing import Any


class BridgeError(Exception):
    """Base class for every error raised by the engine."""


class InvalidBid(BridgeError, ValueError):
    """A bid that is not legal for the given seat at this point of the auction."""

    def __init__(self, seat: Any, bid: Any, reason: str) -> None:
        self.seat = seat
        self.bid = bid
        self.reason = reason
        super().__init__(f"Invalid bid {bid} by {seat}: {reason}")


class InvalidCard(BridgeError, ValueError):
    """A card that the given seat may not play now."""

    def __init__(self, seat: Any, card: Any, reason: str) -> None:
        self.seat = seat
        self.card = card
        self.reason = reason
        super().__init__(f"Invalid card {card} by {seat}: {reason}")


class PreconditionViolation(BridgeError, RuntimeError):
    """Internal misuse of the engine; never caused by valid external input."""


__all__ = ["BridgeError", "InvalidBid", "InvalidCard", "PreconditionViolation"]
