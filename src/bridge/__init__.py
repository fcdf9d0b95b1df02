"""Contract bridge game engine: auction, trick play, duplicate scoring."""

__version__ = "0.1.0"

from .deck import Card, Suit, make_deck_52, parse_card
from .deal import Deal, Seat, Side, Vulnerability, deal_4p, dealer_for_deal, vulnerability_for_deal
from .bidding import DOUBLE, PASS, REDOUBLE, Auction, Bid, Contract, Strain, contract_bid, parse_bid, run_auction
from .play import PlayState, legal_plays, trick_winner
from .scoring import score_contract
from .errors import BridgeError, InvalidBid, InvalidCard, PreconditionViolation
from .agents import HeuristicAgent, RandomAgent
from .game import Session, SessionConfig, play_one_deal, run_match
