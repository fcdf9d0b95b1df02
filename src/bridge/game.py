"""
Session and deal orchestration: deal → auction → play → score → next deal.

``Session`` owns all mutable game state and exposes only queries
(``legal_bids``, ``legal_cards``, ``hand``, ...) and commands (``submit_bid``,
``submit_card``, ``start_next_deal``, ...). Every command either applies fully
and publishes events on the session's ``EventBus``, or raises without changing
anything. Computer seats never act on their own: the caller (a UI scheduler,
a simulation loop) decides when to call ``step_ai`` / ``run_ai_turns``.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from .agents import Agent, HeuristicAgent
from .bidding import Auction, Bid, Contract
from .deal import Deal, Seat, Side, Vulnerability, deal_4p
from .deck import Card
from .errors import InvalidBid, InvalidCard, PreconditionViolation
from .events import (
    AuctionResolved,
    BidMade,
    CardPlayed,
    DealStarted,
    Event,
    EventBus,
    HandCompleted,
    ScoreUpdated,
    TrickCompleted,
)
from .play import PlayPhase, PlayState
from .scoring import credit_sides, score_contract

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """
    human_seat: seat driven by a person (None = all four seats are computer players).
    seed: RNG seed for reproducible deals.
    """

    human_seat: Seat | None = Seat.SOUTH
    seed: int | None = None


class Phase(str, Enum):
    IDLE = "idle"
    BIDDING = "bidding"
    PLAYING = "playing"
    DONE = "done"


class Controller(str, Enum):
    HUMAN = "human"
    AI = "ai"


def seat_authority(human_seat: Seat | None, contract: Contract | None = None) -> dict[Seat, Controller]:
    """
    Who drives each seat. The human seat is always human; when the human is
    declarer they also play dummy's cards. Everything else is the computer.
    """
    authority = {seat: Controller.AI for seat in Seat}
    if human_seat is None:
        return authority
    authority[human_seat] = Controller.HUMAN
    if contract is not None and contract.declarer == human_seat:
        authority[contract.dummy] = Controller.HUMAN
    return authority


@dataclass
class ScoreLedger:
    """Cumulative points per partnership for the whole session."""

    ns: int = 0
    ew: int = 0

    def get(self, side: Side) -> int:
        return self.ns if side is Side.NS else self.ew

    def credit(self, points: dict[Side, int]) -> None:
        self.ns += points.get(Side.NS, 0)
        self.ew += points.get(Side.EW, 0)

    def totals(self) -> dict[Side, int]:
        return {Side.NS: self.ns, Side.EW: self.ew}


class DealRecord(NamedTuple):
    """Outcome of one finished deal. ``contract`` is None for a passed-out deal."""

    deal_number: int
    dealer: Seat
    vulnerability: Vulnerability
    contract: Contract | None
    declarer_tricks: int | None
    score: int
    credit: dict[Side, int]


@dataclass
class Session:
    """
    A sequence of deals at one table with a running score.

    Usage:
        session = Session(SessionConfig(human_seat=Seat.SOUTH, seed=1))
        session.start_session()
        session.run_ai_turns()           # computer seats until the human must act
        session.submit_bid(Seat.SOUTH, PASS)
    """

    config: SessionConfig = field(default_factory=SessionConfig)
    agent: Agent = field(default_factory=HeuristicAgent)
    bus: EventBus = field(default_factory=EventBus)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.config.seed)
        self.ledger = ScoreLedger()
        self.deal_number = 0
        self.phase = Phase.IDLE
        self.deal: Deal | None = None
        self.auction: Auction | None = None
        self.contract: Contract | None = None
        self.play: PlayState | None = None
        self.authority = seat_authority(self.config.human_seat)
        self.records: list[DealRecord] = []

    # ---- lifecycle ----

    def start_session(self) -> DealStarted:
        """Reset the running score and deal counter, then deal board 1."""
        self.ledger = ScoreLedger()
        self.deal_number = 0
        self.records = []
        self.phase = Phase.IDLE
        self.bus.publish(ScoreUpdated(ns=0, ew=0))
        return self.start_next_deal()

    def resume(self, deal_number: int, ns: int, ew: int) -> None:
        """Restore a saved session; the next ``start_next_deal`` deals board ``deal_number + 1``."""
        if deal_number < 0:
            raise ValueError(f"deal_number must be >= 0, got {deal_number}")
        self.ledger = ScoreLedger(ns=ns, ew=ew)
        self.deal_number = deal_number
        self.records = []
        self.phase = Phase.IDLE
        self.deal = self.auction = self.contract = self.play = None

    def start_next_deal(self) -> DealStarted:
        """Advance the deal number (dealer and vulnerability follow it) and deal new hands."""
        if self.phase in (Phase.BIDDING, Phase.PLAYING):
            logger.info("Deal %d abandoned before completion", self.deal_number)
        self.deal_number += 1
        self.deal = deal_4p(self.deal_number, rng=self._rng)
        self.auction = Auction(self.deal.dealer)
        self.contract = None
        self.play = None
        self.authority = seat_authority(self.config.human_seat)
        self.phase = Phase.BIDDING
        event = DealStarted(self.deal_number, self.deal.dealer, self.deal.vulnerability)
        logger.info(
            "Deal %d: dealer %s, vulnerable %s",
            self.deal_number, self.deal.dealer, self.deal.vulnerability.value,
        )
        self.bus.publish(event)
        return event

    # ---- queries ----

    @property
    def scores(self) -> dict[Side, int]:
        return self.ledger.totals()

    def hand(self, seat: Seat) -> tuple[Card, ...]:
        """Cards ``seat`` still holds."""
        if self.play is not None:
            return tuple(self.play.hands[seat])
        if self.deal is None:
            return ()
        return tuple(self.deal.hands[seat])

    def current_actor(self) -> Seat | None:
        """Seat expected to act next, or None outside bidding/playing."""
        if self.phase is Phase.BIDDING:
            assert self.auction is not None
            return self.auction.current_bidder()
        if self.phase is Phase.PLAYING:
            assert self.play is not None
            return self.play.current_player()
        return None

    def controller(self, seat: Seat) -> Controller:
        return self.authority[seat]

    def is_human_turn(self) -> bool:
        actor = self.current_actor()
        return actor is not None and self.authority[actor] is Controller.HUMAN

    def legal_bids(self, seat: Seat) -> list[Bid]:
        """Calls ``seat`` may make now (empty when it is not that seat's turn to bid)."""
        if self.phase is not Phase.BIDDING or self.current_actor() != seat:
            return []
        assert self.auction is not None
        return self.auction.legal_bids(seat)

    def legal_cards(self, seat: Seat) -> list[Card]:
        """Cards ``seat`` may play now (empty when it is not that seat's turn to play)."""
        if self.phase is not Phase.PLAYING or self.current_actor() != seat:
            return []
        assert self.play is not None
        return self.play.legal_cards(seat)

    # ---- commands ----

    def submit_bid(self, seat: Seat, bid: Bid) -> BidMade:
        if self.phase is not Phase.BIDDING:
            raise InvalidBid(seat, bid, f"no auction in progress (phase {self.phase.value})")
        assert self.auction is not None
        self.auction.add(seat, bid)
        event = BidMade(seat, bid)
        self.bus.publish(event)
        if self.auction.is_complete():
            self._resolve_auction()
        return event

    def submit_card(self, seat: Seat, card: Card) -> CardPlayed:
        if self.phase is not Phase.PLAYING:
            raise InvalidCard(seat, card, f"no play in progress (phase {self.phase.value})")
        assert self.play is not None
        self.play.play_card(seat, card)
        event = CardPlayed(seat, card)
        self.bus.publish(event)
        if self.play.phase is PlayPhase.COMPLETE:
            done = self.play.evaluate_trick()
            self.bus.publish(TrickCompleted(done.number, done.winner, done.plays))
            if self.play.is_finished():
                self._complete_hand()
        return event

    def step_ai(self) -> Event | None:
        """
        Let the computer act for the current seat. Returns the event, or None when
        a human must act or no deal is in progress.
        """
        actor = self.current_actor()
        if actor is None or self.authority[actor] is Controller.HUMAN:
            return None
        if self.phase is Phase.BIDDING:
            assert self.auction is not None and self.deal is not None
            bid = self.agent.bid(list(self.deal.hands[actor]), self.auction, actor)
            if not self.auction.is_legal(bid, actor):
                raise PreconditionViolation(f"Agent produced an illegal bid {bid} for {actor}")
            return self.submit_bid(actor, bid)
        assert self.play is not None and self.contract is not None
        card = self.agent.play(list(self.play.hands[actor]), list(self.play.current_trick), self.contract, actor)
        if card not in self.play.legal_cards(actor):
            raise PreconditionViolation(f"Agent produced an illegal card {card} for {actor}")
        return self.submit_card(actor, card)

    def run_ai_turns(self) -> list[Event]:
        """Run computer turns until a human must act or the deal is over."""
        events: list[Event] = []
        while True:
            event = self.step_ai()
            if event is None:
                return events
            events.append(event)

    # ---- internal transitions ----

    def _resolve_auction(self) -> None:
        assert self.auction is not None and self.deal is not None
        contract = self.auction.contract()
        self.contract = contract
        if contract is None:
            self.phase = Phase.DONE
            logger.info("Deal %d passed out", self.deal_number)
            self.records.append(
                DealRecord(
                    deal_number=self.deal_number,
                    dealer=self.deal.dealer,
                    vulnerability=self.deal.vulnerability,
                    contract=None,
                    declarer_tricks=None,
                    score=0,
                    credit={Side.NS: 0, Side.EW: 0},
                )
            )
            self.bus.publish(AuctionResolved(None))
            return
        self.authority = seat_authority(self.config.human_seat, contract)
        self.play = PlayState(self.deal.hands, contract)
        self.phase = Phase.PLAYING
        logger.info("Deal %d contract %s", self.deal_number, contract)
        self.bus.publish(AuctionResolved(contract))

    def _complete_hand(self) -> None:
        assert self.play is not None and self.contract is not None and self.deal is not None
        contract = self.contract
        tricks = self.play.declarer_tricks()
        vulnerable = self.deal.vulnerability.is_vulnerable(contract.side)
        score = score_contract(contract, tricks, vulnerable)
        credit = credit_sides(contract, score)
        self.ledger.credit(credit)
        self.phase = Phase.DONE
        self.records.append(
            DealRecord(
                deal_number=self.deal_number,
                dealer=self.deal.dealer,
                vulnerability=self.deal.vulnerability,
                contract=contract,
                declarer_tricks=tricks,
                score=score,
                credit=credit,
            )
        )
        logger.info(
            "Deal %d: %s made %d tricks, score %+d (NS %d, EW %d)",
            self.deal_number, contract, tricks, score, self.ledger.ns, self.ledger.ew,
        )
        self.bus.publish(HandCompleted(contract, tricks, score, credit))
        self.bus.publish(ScoreUpdated(ns=self.ledger.ns, ew=self.ledger.ew))


def play_one_deal(session: Session) -> DealRecord:
    """
    Deal the next board and let the computer play every seat to the end.
    The session must have no human seat.
    """
    session.start_next_deal()
    session.run_ai_turns()
    if session.phase is not Phase.DONE:
        raise PreconditionViolation("play_one_deal needs a session without a human seat")
    return session.records[-1]


def run_match(
    num_deals: int,
    agent: Agent | None = None,
    seed: int | None = None,
    session: Session | None = None,
) -> tuple[dict[Side, int], list[DealRecord]]:
    """
    Play ``num_deals`` boards with four computer seats. Dealer and vulnerability
    rotate with the deal number; passed-out boards count as played.
    Returns (final totals per side, per-deal records).
    """
    if session is None:
        session = Session(
            config=SessionConfig(human_seat=None, seed=seed),
            agent=agent or HeuristicAgent(),
        )
    per_deal: list[DealRecord] = []
    for _ in range(num_deals):
        per_deal.append(play_one_deal(session))
    return session.scores, per_deal


__all__ = [
    "Controller",
    "DealRecord",
    "Phase",
    "ScoreLedger",
    "Session",
    "SessionConfig",
    "play_one_deal",
    "run_match",
    "seat_authority",
]
