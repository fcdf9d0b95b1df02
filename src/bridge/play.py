"""
Trick-taking: legal plays, card values, trick winner and the 13-trick play state.
Must follow the led suit when possible; otherwise any card (ruff or discard).
Card value within a trick: trump = 200 + rank, led suit = 100 + rank, anything else = rank.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import NamedTuple

from .bidding import Contract
from .deal import Seat, Side
from .deck import Card, Suit
from .errors import InvalidCard, PreconditionViolation

logger = logging.getLogger(__name__)

TRICKS_PER_DEAL = 13


class TrickPlay(NamedTuple):
    seat: Seat
    card: Card


def led_suit(trick: list[TrickPlay]) -> Suit | None:
    """Suit of the first card of the trick (None if nobody has played yet)."""
    if not trick:
        return None
    return trick[0].card.suit


def card_value(card: Card, trump: Suit | None, lead: Suit | None) -> int:
    if trump is not None and card.suit == trump:
        return 200 + card.rank
    if card.suit == lead:
        return 100 + card.rank
    return card.rank


def legal_plays(hand: list[Card], trick: list[TrickPlay]) -> list[Card]:
    """
    Cards that can be legally played from hand given the current trick.
    Leading: any card. Following: cards of the led suit if any, else any card.
    """
    lead = led_suit(trick)
    if lead is None:
        return list(hand)
    followers = [c for c in hand if c.suit == lead]
    if followers:
        return followers
    return list(hand)


def current_winner(trick: list[TrickPlay], trump: Suit | None) -> TrickPlay | None:
    """Play currently winning a (possibly incomplete) trick."""
    if not trick:
        return None
    lead = led_suit(trick)
    best = trick[0]
    for play in trick[1:]:
        if card_value(play.card, trump, lead) > card_value(best.card, trump, lead):
            best = play
    return best


def trick_winner(trick: list[TrickPlay], trump: Suit | None) -> Seat:
    """Seat that wins a complete trick of four plays."""
    if len(trick) != 4:
        raise PreconditionViolation(f"A trick needs 4 plays to be evaluated, got {len(trick)}")
    winner = current_winner(trick, trump)
    assert winner is not None
    return winner.seat


class CompletedTrick(NamedTuple):
    number: int  # 1..13
    leader: Seat
    plays: tuple[TrickPlay, ...]
    winner: Seat


class PlayPhase(str, Enum):
    LEADING = "leading"
    FOLLOWING = "following"
    COMPLETE = "complete"
    HAND_FINISHED = "hand-finished"


class PlayState:
    """
    Mutable state for the play of one deal: hands, current trick, tricks won per side.

    Flow: ``play_card`` until the trick holds four cards (phase COMPLETE), then
    ``evaluate_trick`` credits the winner, who leads next. After the 13th trick
    the phase is HAND_FINISHED.
    """

    def __init__(self, hands: dict[Seat, list[Card]], contract: Contract):
        self.hands = {seat: list(h) for seat, h in hands.items()}
        self.contract = contract
        self.trump = contract.trump
        self.leader: Seat = contract.opening_leader
        self.current_trick: list[TrickPlay] = []
        self.tricks: dict[Side, int] = {Side.NS: 0, Side.EW: 0}
        self.history: list[CompletedTrick] = []

    @property
    def tricks_played(self) -> int:
        return len(self.history)

    @property
    def phase(self) -> PlayPhase:
        if self.tricks_played == TRICKS_PER_DEAL:
            return PlayPhase.HAND_FINISHED
        if len(self.current_trick) == 4:
            return PlayPhase.COMPLETE
        if self.current_trick:
            return PlayPhase.FOLLOWING
        return PlayPhase.LEADING

    def is_finished(self) -> bool:
        return self.phase is PlayPhase.HAND_FINISHED

    def current_player(self) -> Seat:
        if self.phase in (PlayPhase.COMPLETE, PlayPhase.HAND_FINISHED):
            raise PreconditionViolation(f"No player to act in phase {self.phase.value}")
        return self.leader.offset(len(self.current_trick))

    def legal_cards(self, seat: Seat) -> list[Card]:
        return legal_plays(self.hands[seat], self.current_trick)

    def winning_play(self) -> TrickPlay | None:
        return current_winner(self.current_trick, self.trump)

    def declarer_tricks(self) -> int:
        return self.tricks[self.contract.side]

    def play_card(self, seat: Seat, card: Card) -> TrickPlay:
        """Play ``card`` from ``seat``'s hand. Raises InvalidCard (no mutation) if not allowed."""
        if self.phase in (PlayPhase.COMPLETE, PlayPhase.HAND_FINISHED):
            raise PreconditionViolation(f"Cannot play a card in phase {self.phase.value}")
        expected = self.current_player()
        if seat != expected:
            logger.debug("Rejected %s by %s: %s to play", card, seat, expected)
            raise InvalidCard(seat, card, f"it is {expected}'s turn")
        hand = self.hands[seat]
        if card not in hand:
            logger.debug("Rejected %s by %s: not in hand", card, seat)
            raise InvalidCard(seat, card, "card is not in hand")
        if card not in self.legal_cards(seat):
            lead = led_suit(self.current_trick)
            assert lead is not None
            logger.debug("Rejected %s by %s: must follow %s", card, seat, lead.symbol)
            raise InvalidCard(seat, card, f"must follow suit {lead.symbol}")
        hand.remove(card)
        play = TrickPlay(seat, card)
        self.current_trick.append(play)
        logger.debug("%s plays %s", seat, card)
        return play

    def evaluate_trick(self) -> CompletedTrick:
        """Credit the complete trick to its winner's side and clear it."""
        if self.phase is not PlayPhase.COMPLETE:
            raise PreconditionViolation(
                f"Trick has {len(self.current_trick)} plays; it can only be evaluated with 4"
            )
        winner = trick_winner(self.current_trick, self.trump)
        done = CompletedTrick(
            number=self.tricks_played + 1,
            leader=self.leader,
            plays=tuple(self.current_trick),
            winner=winner,
        )
        self.history.append(done)
        self.tricks[winner.side] += 1
        self.leader = winner
        self.current_trick = []
        logger.debug("Trick %d won by %s", done.number, winner)
        return done


__all__ = [
    "CompletedTrick",
    "PlayPhase",
    "PlayState",
    "TRICKS_PER_DEAL",
    "TrickPlay",
    "card_value",
    "current_winner",
    "led_suit",
    "legal_plays",
    "trick_winner",
]
