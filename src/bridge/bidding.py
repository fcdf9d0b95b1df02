"""
Auction (bidding) for 4 players.
Strain order: ♣ < ♦ < ♥ < ♠ < NT. A contract bid's order key is (level - 1) * 5 + strain.
Dealer speaks first, then clockwise. Four passes from the start = passed out;
otherwise three passes after a contract bid end the auction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, NamedTuple

from .deal import Seat, Side
from .deck import Suit
from .errors import InvalidBid, PreconditionViolation

logger = logging.getLogger(__name__)


class Strain(IntEnum):
    """Bidding strains in ascending rank."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3
    NOTRUMP = 4

    @property
    def symbol(self) -> str:
        return STRAIN_SYMBOLS[self]

    @property
    def trump_suit(self) -> Suit | None:
        """Trump suit for play, None in notrump."""
        return _STRAIN_TO_SUIT.get(self)

    def is_major(self) -> bool:
        return self in (Strain.HEARTS, Strain.SPADES)

    def is_minor(self) -> bool:
        return self in (Strain.CLUBS, Strain.DIAMONDS)

    @classmethod
    def from_suit(cls, suit: Suit) -> "Strain":
        return _SUIT_TO_STRAIN[suit]


STRAIN_SYMBOLS = ("♣", "♦", "♥", "♠", "NT")
STRAIN_LETTERS = ("C", "D", "H", "S", "NT")

_STRAIN_TO_SUIT = {
    Strain.CLUBS: Suit.CLUBS,
    Strain.DIAMONDS: Suit.DIAMONDS,
    Strain.HEARTS: Suit.HEARTS,
    Strain.SPADES: Suit.SPADES,
}
_SUIT_TO_STRAIN = {suit: strain for strain, suit in _STRAIN_TO_SUIT.items()}


class BidKind(Enum):
    PASS = "pass"
    DOUBLE = "X"
    REDOUBLE = "XX"
    CONTRACT = "contract"


@dataclass(frozen=True)
class Bid:
    """
    A call in the auction: Pass, Double, Redouble, or a contract bid
    (level 1..7 + strain). Use the module constants / ``contract_bid`` to build them.
    """

    kind: BidKind
    level: int | None = None
    strain: Strain | None = None

    def __post_init__(self) -> None:
        if self.kind is BidKind.CONTRACT:
            if self.level is None or self.strain is None:
                raise ValueError("Contract bids need a level and a strain")
            if not 1 <= self.level <= 7:
                raise ValueError(f"Bid level out of range: {self.level}")
            object.__setattr__(self, "strain", Strain(self.strain))
        elif self.level is not None or self.strain is not None:
            raise ValueError(f"{self.kind.name} carries no level or strain")

    def is_contract_bid(self) -> bool:
        return self.kind is BidKind.CONTRACT

    @property
    def key(self) -> int:
        """Total order of contract bids: 1♣ = 0 .. 7NT = 34."""
        if not self.is_contract_bid():
            raise ValueError(f"{self} has no order key")
        assert self.level is not None and self.strain is not None
        return (self.level - 1) * 5 + int(self.strain)

    def __str__(self) -> str:
        if self.kind is BidKind.PASS:
            return "Pass"
        if self.kind is BidKind.DOUBLE:
            return "X"
        if self.kind is BidKind.REDOUBLE:
            return "XX"
        assert self.strain is not None
        return f"{self.level}{self.strain.symbol}"

    def __repr__(self) -> str:
        return str(self)


PASS = Bid(BidKind.PASS)
DOUBLE = Bid(BidKind.DOUBLE)
REDOUBLE = Bid(BidKind.REDOUBLE)


def contract_bid(level: int, strain: Strain) -> Bid:
    return Bid(BidKind.CONTRACT, level=level, strain=strain)


# All 35 contract bids in ascending order (index == key).
ALL_CONTRACT_BIDS = tuple(contract_bid(level, strain) for level in range(1, 8) for strain in Strain)


def parse_bid(text: str) -> Bid:
    """
    Parse "Pass"/"P", "X", "XX", "1C", "3NT", "4♠", "2N" ... into a Bid.
    """
    s = text.strip().upper()
    if s in ("P", "PASS"):
        return PASS
    if s in ("X", "DBL", "DOUBLE"):
        return DOUBLE
    if s in ("XX", "RDBL", "REDOUBLE"):
        return REDOUBLE
    if len(s) < 2 or not s[0].isdigit():
        raise ValueError(f"Cannot parse bid: {text!r}")
    level = int(s[0])
    strain_str = s[1:]
    if strain_str == "N":
        strain_str = "NT"
    if strain_str in STRAIN_LETTERS:
        strain = Strain(STRAIN_LETTERS.index(strain_str))
    elif strain_str in STRAIN_SYMBOLS:
        strain = Strain(STRAIN_SYMBOLS.index(strain_str))
    else:
        raise ValueError(f"Unknown strain in bid: {text!r}")
    return contract_bid(level, strain)


@dataclass(frozen=True)
class Contract:
    """Final contract of a deal. Never mutated once the auction resolves."""

    level: int
    strain: Strain
    declarer: Seat
    doubled: bool = False
    redoubled: bool = False

    @property
    def tricks_needed(self) -> int:
        return self.level + 6

    @property
    def side(self) -> Side:
        return self.declarer.side

    @property
    def dummy(self) -> Seat:
        return self.declarer.partner

    @property
    def opening_leader(self) -> Seat:
        """The seat on declarer's left leads to the first trick."""
        return self.declarer.left

    @property
    def trump(self) -> Suit | None:
        return self.strain.trump_suit

    def __str__(self) -> str:
        s = f"{self.level}{self.strain.symbol}"
        if self.redoubled:
            s += " XX"
        elif self.doubled:
            s += " X"
        return f"{s} by {self.declarer}"


class AuctionEntry(NamedTuple):
    seat: Seat
    bid: Bid


def find_declarer(entries: list[AuctionEntry] | tuple[AuctionEntry, ...], strain: Strain, side: Side) -> Seat | None:
    """
    First seat of ``side`` that named ``strain`` in any contract bid, scanning
    from the start of the auction.
    """
    for seat, bid in entries:
        if bid.is_contract_bid() and bid.strain == strain and seat.side == side:
            return seat
    return None


class Auction:
    """
    Append-only auction history plus the dealer. The current bidder and the
    doubled/redoubled status are always derived from the history.
    """

    def __init__(self, dealer: Seat) -> None:
        self.dealer = dealer
        self._entries: list[AuctionEntry] = []

    @property
    def entries(self) -> tuple[AuctionEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ---- derived state ----

    def highest_contract_entry(self) -> AuctionEntry | None:
        """Last contract bid made (Pass/X/XX are skipped)."""
        for entry in reversed(self._entries):
            if entry.bid.is_contract_bid():
                return entry
        return None

    def doubled_state(self) -> tuple[bool, bool]:
        """
        (doubled, redoubled) of the current contract bid, from the calls made after it.
        A Double resets redoubled; a Redouble sets redoubled.
        """
        last = -1
        for i, entry in enumerate(self._entries):
            if entry.bid.is_contract_bid():
                last = i
        doubled = redoubled = False
        for entry in self._entries[last + 1:]:
            if entry.bid.kind is BidKind.DOUBLE:
                doubled, redoubled = True, False
            elif entry.bid.kind is BidKind.REDOUBLE:
                redoubled = True
        return doubled, redoubled

    def last_contract_bid_by(self, side: Side) -> AuctionEntry | None:
        for entry in reversed(self._entries):
            if entry.bid.is_contract_bid() and entry.seat.side == side:
                return entry
        return None

    def is_passed_out(self) -> bool:
        return len(self._entries) == 4 and all(e.bid.kind is BidKind.PASS for e in self._entries)

    def is_resolved(self) -> bool:
        """A contract bid exists and the three latest calls are passes."""
        if len(self._entries) < 4 or self.highest_contract_entry() is None:
            return False
        return all(e.bid.kind is BidKind.PASS for e in self._entries[-3:])

    def is_complete(self) -> bool:
        return self.is_passed_out() or self.is_resolved()

    def current_bidder(self) -> Seat:
        if self.is_complete():
            raise PreconditionViolation("Auction is over; there is no current bidder")
        return self.dealer.offset(len(self._entries))

    # ---- legality ----

    def illegal_reason(self, bid: Bid, seat: Seat) -> str | None:
        """Why ``bid`` is illegal for ``seat`` now, or None if it is legal."""
        if bid.kind is BidKind.PASS:
            return None
        highest = self.highest_contract_entry()
        if bid.is_contract_bid():
            if highest is not None and bid.key <= highest.bid.key:
                return f"must be higher than {highest.bid}"
            return None
        if highest is None:
            return "there is no contract bid yet"
        doubled, redoubled = self.doubled_state()
        if bid.kind is BidKind.DOUBLE:
            if highest.seat.side == seat.side:
                return "cannot double your own side"
            if doubled or redoubled:
                return "already doubled"
            return None
        # Redouble
        if not doubled or redoubled:
            return "contract is not doubled"
        if highest.seat.side != seat.side:
            return "only the side that made the bid may redouble"
        return None

    def is_legal(self, bid: Bid, seat: Seat) -> bool:
        return self.illegal_reason(bid, seat) is None

    def legal_bids(self, seat: Seat) -> list[Bid]:
        """Pass, Double, Redouble (when legal), then legal contract bids ascending."""
        candidates = [PASS, DOUBLE, REDOUBLE, *ALL_CONTRACT_BIDS]
        return [b for b in candidates if self.is_legal(b, seat)]

    # ---- commands ----

    def add(self, seat: Seat, bid: Bid) -> AuctionEntry:
        """Append a call. Raises InvalidBid (no mutation) if it is out of turn or illegal."""
        if self.is_complete():
            raise PreconditionViolation("Auction is over; no more calls may be made")
        expected = self.dealer.offset(len(self._entries))
        if seat != expected:
            logger.debug("Rejected %s by %s: %s to call", bid, seat, expected)
            raise InvalidBid(seat, bid, f"it is {expected}'s turn")
        reason = self.illegal_reason(bid, seat)
        if reason is not None:
            logger.debug("Rejected %s by %s: %s", bid, seat, reason)
            raise InvalidBid(seat, bid, reason)
        entry = AuctionEntry(seat, bid)
        self._entries.append(entry)
        logger.debug("%s bids %s", seat, bid)
        return entry

    def contract(self) -> Contract | None:
        """Resolve the finished auction. None when passed out."""
        if not self.is_complete():
            raise PreconditionViolation("Auction has not ended yet")
        if self.is_passed_out():
            return None
        highest = self.highest_contract_entry()
        assert highest is not None and highest.bid.strain is not None and highest.bid.level is not None
        strain = highest.bid.strain
        # Seat.NORTH is 0, so compare with None rather than relying on truthiness.
        declarer = find_declarer(self._entries, strain, highest.seat.side)
        if declarer is None:
            declarer = highest.seat
        doubled, redoubled = self.doubled_state()
        return Contract(
            level=highest.bid.level,
            strain=strain,
            declarer=declarer,
            doubled=doubled,
            redoubled=redoubled,
        )


def run_auction(
    dealer: Seat,
    get_bid: Callable[[Seat, Auction], Bid],
) -> Auction:
    """
    Run a complete auction. get_bid(seat, auction) returns the call for the seat to act.
    An illegal call raises InvalidBid. Returns the finished Auction (see ``Auction.contract``).
    """
    auction = Auction(dealer)
    while not auction.is_complete():
        seat = auction.current_bidder()
        auction.add(seat, get_bid(seat, auction))
    return auction


__all__ = [
    "ALL_CONTRACT_BIDS",
    "Auction",
    "AuctionEntry",
    "Bid",
    "BidKind",
    "Contract",
    "DOUBLE",
    "PASS",
    "REDOUBLE",
    "Strain",
    "contract_bid",
    "find_declarer",
    "parse_bid",
    "run_auction",
]
