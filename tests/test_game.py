"""Session orchestration: turn control, events, scoring and match runs."""
from collections import Counter

import pytest

from bridge.agents import RandomAgent
from bridge.bidding import DOUBLE, PASS, Auction, Bid, Contract, Strain, parse_bid
from bridge.deal import VULNERABILITY_TABLE, Seat, Side
from bridge.deck import Card
from bridge.errors import InvalidBid, InvalidCard, PreconditionViolation
from bridge.events import AuctionResolved, HandCompleted, ScoreUpdated
from bridge.game import (
    Controller,
    Phase,
    Session,
    SessionConfig,
    play_one_deal,
    run_match,
    seat_authority,
)
from bridge.play import TrickPlay
from bridge.policies import choose_card


class PassingAgent:
    """Always passes; plays like the heuristic agent."""

    def bid(self, hand: list[Card], auction: Auction, seat: Seat) -> Bid:
        return PASS

    def play(self, hand: list[Card], trick: list[TrickPlay], contract: Contract, seat: Seat) -> Card:
        return choose_card(hand, trick, contract, seat)


class DoublingAgent(PassingAgent):
    def bid(self, hand: list[Card], auction: Auction, seat: Seat) -> Bid:
        return DOUBLE


def _recording_session(**kwargs) -> tuple[Session, list]:
    events: list = []
    session = Session(**kwargs)
    session.bus.subscribe(events.append)
    return session, events


def test_run_match_rotation_and_totals():
    totals, records = run_match(8, seed=3)
    assert [r.deal_number for r in records] == list(range(1, 9))
    assert [r.dealer for r in records] == [Seat.NORTH, Seat.EAST, Seat.SOUTH, Seat.WEST] * 2
    assert [r.vulnerability for r in records] == list(VULNERABILITY_TABLE[:8])
    assert totals[Side.NS] == sum(r.credit[Side.NS] for r in records)
    assert totals[Side.EW] == sum(r.credit[Side.EW] for r in records)
    for record in records:
        if record.contract is None:
            assert record.score == 0
        else:
            assert 0 <= record.declarer_tricks <= 13


def test_run_match_is_reproducible():
    assert run_match(4, seed=11) == run_match(4, seed=11)


def test_run_match_with_random_agent():
    totals, records = run_match(4, agent=RandomAgent(seed=2), seed=2)
    assert len(records) == 4
    assert all(points >= 0 for points in totals.values())


def test_seat_authority():
    assert set(seat_authority(None).values()) == {Controller.AI}
    authority = seat_authority(Seat.SOUTH)
    assert authority[Seat.SOUTH] is Controller.HUMAN
    assert authority[Seat.NORTH] is Controller.AI
    declaring = seat_authority(Seat.SOUTH, Contract(3, Strain.NOTRUMP, Seat.SOUTH))
    assert declaring[Seat.NORTH] is Controller.HUMAN
    defending = seat_authority(Seat.SOUTH, Contract(3, Strain.NOTRUMP, Seat.EAST))
    assert defending[Seat.NORTH] is Controller.AI
    assert defending[Seat.WEST] is Controller.AI
    dummy = seat_authority(Seat.SOUTH, Contract(3, Strain.NOTRUMP, Seat.NORTH))
    assert dummy[Seat.SOUTH] is Controller.HUMAN
    assert dummy[Seat.NORTH] is Controller.AI


def test_ai_waits_for_human_bid():
    session = Session(SessionConfig(human_seat=Seat.SOUTH, seed=5))
    started = session.start_session()
    assert started.deal_number == 1 and started.dealer is Seat.NORTH
    session.run_ai_turns()

    assert session.phase is Phase.BIDDING
    assert session.current_actor() is Seat.SOUTH
    assert session.is_human_turn()
    assert session.step_ai() is None
    assert len(session.hand(Seat.SOUTH)) == 13

    bids = session.legal_bids(Seat.SOUTH)
    assert bids and bids[0] == PASS
    assert session.legal_bids(Seat.SOUTH) == bids
    assert session.legal_bids(Seat.NORTH) == []
    assert session.legal_cards(Seat.SOUTH) == []

    calls = len(session.auction)
    with pytest.raises(InvalidBid):
        session.submit_bid(Seat.NORTH, PASS)
    with pytest.raises(InvalidCard):
        session.submit_card(Seat.SOUTH, session.hand(Seat.SOUTH)[0])
    assert len(session.auction) == calls


def test_human_driven_deal_events():
    session, events = _recording_session(config=SessionConfig(human_seat=Seat.SOUTH, seed=9))
    session.start_session()
    while session.phase is not Phase.DONE:
        session.run_ai_turns()
        if session.phase is Phase.DONE:
            break
        seat = session.current_actor()
        assert session.controller(seat) is Controller.HUMAN
        if session.phase is Phase.BIDDING:
            session.submit_bid(seat, session.legal_bids(seat)[0])
        else:
            session.submit_card(seat, session.legal_cards(seat)[0])

    kinds = Counter(type(e).__name__ for e in events)
    assert kinds["DealStarted"] == 1
    assert kinds["BidMade"] == len(session.auction)
    assert kinds["AuctionResolved"] == 1
    record = session.records[-1]
    if record.contract is None:
        assert kinds["CardPlayed"] == 0
        assert kinds["ScoreUpdated"] == 1
    else:
        assert kinds["CardPlayed"] == 52
        assert kinds["TrickCompleted"] == 13
        assert kinds["HandCompleted"] == 1
        assert kinds["ScoreUpdated"] == 2
        final = [e for e in events if isinstance(e, ScoreUpdated)][-1]
        assert (final.ns, final.ew) == (session.ledger.ns, session.ledger.ew)
        completed = next(e for e in events if isinstance(e, HandCompleted))
        assert completed.credit == record.credit


def test_passed_out_deal():
    session, events = _recording_session(
        config=SessionConfig(human_seat=None, seed=1), agent=PassingAgent()
    )
    record = play_one_deal(session)
    assert record.contract is None
    assert record.declarer_tricks is None
    assert record.score == 0
    assert session.phase is Phase.DONE
    assert session.scores == {Side.NS: 0, Side.EW: 0}
    resolved = [e for e in events if isinstance(e, AuctionResolved)]
    assert len(resolved) == 1 and resolved[0].passed_out
    assert session.step_ai() is None
    assert session.current_actor() is None


def test_agent_illegal_bid_is_a_precondition_violation():
    session = Session(SessionConfig(human_seat=None, seed=1), agent=DoublingAgent())
    session.start_next_deal()
    with pytest.raises(PreconditionViolation):
        session.step_ai()
    assert len(session.auction) == 0


def test_play_one_deal_needs_computer_seats():
    session = Session(SessionConfig(human_seat=Seat.SOUTH, seed=1))
    with pytest.raises(PreconditionViolation):
        play_one_deal(session)


def test_human_declarer_plays_dummy():
    session = Session(SessionConfig(human_seat=Seat.SOUTH, seed=4), agent=PassingAgent())
    session.start_session()
    session.run_ai_turns()  # north and east pass
    session.submit_bid(Seat.SOUTH, parse_bid("1NT"))
    session.run_ai_turns()  # the others pass, then west leads

    assert session.phase is Phase.PLAYING
    assert session.contract == Contract(1, Strain.NOTRUMP, Seat.SOUTH)
    assert session.controller(Seat.NORTH) is Controller.HUMAN
    assert session.controller(Seat.EAST) is Controller.AI

    assert session.current_actor() is Seat.NORTH
    assert session.is_human_turn()
    card = session.legal_cards(Seat.NORTH)[0]
    session.submit_card(Seat.NORTH, card)
    assert card not in session.hand(Seat.NORTH)
    assert session.current_actor() is Seat.EAST


def test_submit_card_rejects_illegal_card():
    session = Session(SessionConfig(human_seat=Seat.SOUTH, seed=4), agent=PassingAgent())
    session.start_session()
    session.run_ai_turns()
    session.submit_bid(Seat.SOUTH, parse_bid("1NT"))
    session.run_ai_turns()
    lead = session.play.current_trick[0].card
    north = session.hand(Seat.NORTH)
    off_suit = [c for c in north if c.suit != lead.suit]
    if any(c.suit == lead.suit for c in north) and off_suit:
        with pytest.raises(InvalidCard):
            session.submit_card(Seat.NORTH, off_suit[0])
    with pytest.raises(InvalidCard):
        session.submit_card(Seat.EAST, session.hand(Seat.EAST)[0])
    assert len(session.play.current_trick) == 1


def test_start_session_resets_score():
    session = Session(SessionConfig(human_seat=None, seed=2))
    for _ in range(3):
        play_one_deal(session)
    assert session.deal_number == 3
    started = session.start_session()
    assert started.deal_number == 1
    assert session.scores == {Side.NS: 0, Side.EW: 0}
    assert session.records == []


def test_start_next_deal_abandons_current_deal():
    session = Session(SessionConfig(human_seat=Seat.SOUTH, seed=2))
    session.start_session()
    session.run_ai_turns()
    started = session.start_next_deal()
    assert started.deal_number == 2
    assert started.dealer is Seat.EAST
    assert session.phase is Phase.BIDDING
    assert len(session.auction) == 0


def test_resume_continues_rotation():
    session = Session(SessionConfig(human_seat=None, seed=2))
    session.resume(2, ns=300, ew=50)
    record = play_one_deal(session)
    assert record.deal_number == 3
    assert record.dealer is Seat.SOUTH
    assert session.ledger.ns == 300 + record.credit[Side.NS]
    assert session.ledger.ew == 50 + record.credit[Side.EW]
    with pytest.raises(ValueError):
        session.resume(-1, ns=0, ew=0)


def test_ledger_credit():
    session = Session(SessionConfig(human_seat=None))
    session.ledger.credit({Side.NS: 0, Side.EW: 200})
    assert session.ledger.get(Side.EW) == 200
    assert session.scores == {Side.NS: 0, Side.EW: 200}
    assert session.hand(Seat.NORTH) == ()
