"""
Rule-based heuristics driving the computer seats.

- ``choose_bid(hand, auction, seat)``: opening / responding / doubling on HCP
  and suit lengths.
- ``choose_card(hand, trick, contract, seat)``: greedy card play with separate
  logic for defenders and for the declaring side (declarer and dummy).

Both are pure functions of the current state and always return a legal action.
They are deliberately simple greedy rules, not a bidding system or a solver.
"""
from __future__ import annotations

from .bidding import DOUBLE, PASS, Auction, Bid, Contract, Strain, contract_bid
from .deal import Seat
from .deck import Card, Suit, high_card_points, suit_lengths
from .play import TrickPlay, card_value, current_winner, legal_plays

OPENING_HCP = 12
STRONG_OPENING_HCP = 22
RESPONSE_HCP = 6
INVITE_HCP = 10
DOUBLE_HCP = 14
NT_OPENING_RANGE = (15, 17)
RAISE_SUPPORT = 3


# ---- bidding ----


def is_balanced(lengths: dict[Suit, int]) -> bool:
    """Every suit has between 2 and 5 cards."""
    return all(2 <= n <= 5 for n in lengths.values())


def best_strain(lengths: dict[Suit, int], hcp: int) -> Strain:
    """
    Longest suit, ties going to the higher suit (♠ > ♥ > ♦ > ♣);
    NT instead when the hand is balanced with 15-17 HCP.
    """
    best = Suit.SPADES
    best_len = -1
    for suit in Suit:  # spades first, so ties keep the higher suit
        if lengths[suit] > best_len:
            best, best_len = suit, lengths[suit]
    low, high = NT_OPENING_RANGE
    if is_balanced(lengths) and low <= hcp <= high:
        return Strain.NOTRUMP
    return Strain.from_suit(best)


def _cheapest_legal(auction: Auction, seat: Seat, strain: Strain) -> Bid | None:
    for level in range(1, 8):
        bid = contract_bid(level, strain)
        if auction.is_legal(bid, seat):
            return bid
    return None


def choose_bid(hand: list[Card], auction: Auction, seat: Seat) -> Bid:
    hcp = high_card_points(hand)
    lengths = suit_lengths(hand)

    def legal(bid: Bid) -> bool:
        return auction.is_legal(bid, seat)

    # Opening: nobody has made a contract bid yet.
    if auction.highest_contract_entry() is None:
        if hcp >= OPENING_HCP:
            bid = contract_bid(1, best_strain(lengths, hcp))
            if legal(bid):
                return bid
        if hcp >= STRONG_OPENING_HCP:
            bid = contract_bid(2, Strain.NOTRUMP)
            if legal(bid):
                return bid
        return PASS

    # Our side has bid (the last contract bid by either of us counts).
    own = auction.last_contract_bid_by(seat.side)
    if hcp >= RESPONSE_HCP and own is not None:
        strain = own.bid.strain
        level = own.bid.level
        assert strain is not None and level is not None
        if strain is not Strain.NOTRUMP and lengths[strain.trump_suit] >= RAISE_SUPPORT:
            new_level = level + (2 if hcp >= INVITE_HCP else 1)
            if new_level <= 7:
                raise_bid = contract_bid(new_level, strain)
                if legal(raise_bid):
                    return raise_bid
        if hcp >= INVITE_HCP:
            nt_bid = _cheapest_legal(auction, seat, Strain.NOTRUMP)
            if nt_bid is not None:
                return nt_bid
        own_bid = _cheapest_legal(auction, seat, best_strain(lengths, hcp))
        if own_bid is not None:
            return own_bid

    if hcp >= DOUBLE_HCP and legal(DOUBLE):
        return DOUBLE
    return PASS


# ---- card play ----


def _rank(card: Card) -> int:
    return card.rank


def _group_by_suit(cards: list[Card]) -> dict[Suit, list[Card]]:
    """Cards per suit, suits in the order they first appear."""
    groups: dict[Suit, list[Card]] = {}
    for c in cards:
        groups.setdefault(c.suit, []).append(c)
    return groups


def opening_lead(legal: list[Card], trump: Suit | None) -> Card:
    """
    Defender's lead: longest non-trump suit (trumps only if nothing else is held),
    then 4th highest from 4+ cards, top of a two-card sequence, or the lowest card.
    """
    groups = _group_by_suit(legal)
    chosen: list[Card] | None = None
    for suit, cards in groups.items():
        if suit == trump and len(groups) > 1:
            continue
        if chosen is None or len(cards) > len(chosen):
            chosen = cards
    if chosen is None:
        chosen = legal
    ordered = sorted(chosen, key=_rank, reverse=True)
    if len(ordered) >= 4:
        return ordered[3]
    if len(ordered) >= 2 and ordered[0].rank - ordered[1].rank == 1:
        return ordered[0]
    return ordered[-1]


def _beats(card: Card, winner: TrickPlay | None, trump: Suit | None, lead: Suit) -> bool:
    if winner is None:
        return True
    return card_value(card, trump, lead) > card_value(winner.card, trump, lead)


def defender_play(
    seat: Seat,
    legal: list[Card],
    trick: list[TrickPlay],
    trump: Suit | None,
    lead: Suit,
) -> Card:
    """Win as cheaply as possible, else play low; ruff only when the opponents are winning."""
    winner = current_winner(trick, trump)
    lead_cards = [c for c in legal if c.suit == lead]
    if lead_cards:
        beating = [c for c in lead_cards if _beats(c, winner, trump, lead)]
        if beating:
            return min(beating, key=_rank)
        return min(lead_cards, key=_rank)
    trumps = [c for c in legal if trump is not None and c.suit == trump]
    if trumps and winner is not None and winner.seat.side != seat.side:
        return min(trumps, key=_rank)
    return min(legal, key=_rank)


def declarer_side_play(
    seat: Seat,
    legal: list[Card],
    trick: list[TrickPlay],
    trump: Suit | None,
    lead: Suit,
) -> Card:
    """
    Declarer or dummy: play low under a winning partner, otherwise win cheaply;
    ruff cheaply when void unless partner already holds the trick.
    """
    winner = current_winner(trick, trump)
    partner_winning = winner is not None and winner.seat == seat.partner
    lead_cards = [c for c in legal if c.suit == lead]
    if lead_cards:
        if partner_winning:
            return min(lead_cards, key=_rank)
        beating = [c for c in lead_cards if _beats(c, winner, trump, lead)]
        if beating:
            return min(beating, key=_rank)
        return min(lead_cards, key=_rank)
    trumps = [c for c in legal if trump is not None and c.suit == trump]
    if trumps and not partner_winning:
        return min(trumps, key=_rank)
    return min(legal, key=_rank)


def choose_card(
    hand: list[Card],
    trick: list[TrickPlay],
    contract: Contract,
    seat: Seat,
) -> Card:
    legal = legal_plays(hand, trick)
    if not legal:
        raise ValueError(f"{seat} has no card to play")
    trump = contract.trump
    defending = seat.side != contract.side

    if not trick:
        if defending:
            return opening_lead(legal, trump)
        # Declaring side on lead: treat the first suit held as the suit led.
        return declarer_side_play(seat, legal, trick, trump, legal[0].suit)

    lead = trick[0].card.suit
    if defending:
        return defender_play(seat, legal, trick, trump, lead)
    return declarer_side_play(seat, legal, trick, trump, lead)


__all__ = [
    "best_strain",
    "choose_bid",
    "choose_card",
    "declarer_side_play",
    "defender_play",
    "is_balanced",
    "opening_lead",
]
