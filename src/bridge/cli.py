"""
Command-line interface for simulating bridge deals and scoring contracts.

Usage examples:

    python -m bridge.cli simulate --deals 16 --seed 7
    python -m bridge.cli simulate --deals 4 --ledger runs/ledger.json -v
    python -m bridge.cli score 4SX --tricks 9 --vulnerable
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .agents import Agent, HeuristicAgent, RandomAgent
from .bidding import Contract, parse_bid
from .deal import Seat
from .game import DealRecord, Session, SessionConfig, play_one_deal
from .persistence import load_ledger, save_ledger
from .scoring import score_contract


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def parse_contract(text: str, declarer: Seat = Seat.SOUTH) -> Contract:
    """Parse "3NT", "4SX", "6♥XX" ... into a Contract played by ``declarer``."""
    s = text.strip().upper()
    doubled = redoubled = False
    if s.endswith("XX"):
        doubled = redoubled = True
        s = s[:-2]
    elif s.endswith("X"):
        doubled = True
        s = s[:-1]
    bid = parse_bid(s)
    if not bid.is_contract_bid():
        raise ValueError(f"Not a contract: {text!r}")
    assert bid.level is not None and bid.strain is not None
    return Contract(bid.level, bid.strain, declarer, doubled=doubled, redoubled=redoubled)


def _format_record(record: DealRecord, ns_total: int, ew_total: int) -> str:
    head = (
        f"[deal {record.deal_number}] dealer={record.dealer} "
        f"vul={record.vulnerability.value}"
    )
    if record.contract is None:
        return f"{head} passed out NS={ns_total} EW={ew_total}"
    return (
        f"{head} contract={record.contract} tricks={record.declarer_tricks} "
        f"score={record.score:+d} NS={ns_total} EW={ew_total}"
    )


def _add_simulate_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "simulate",
        help="Play deals with four computer seats and report the running score.",
    )
    parser.add_argument(
        "--deals",
        type=int,
        default=16,
        help="Number of deals to play.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for the deals.",
    )
    parser.add_argument(
        "--agent",
        choices=("heuristic", "random"),
        default="heuristic",
        help="Policy used for all four seats.",
    )
    parser.add_argument(
        "--ledger",
        type=str,
        default=None,
        help="JSON file to resume the score from (if present) and save it to afterwards.",
    )
    parser.set_defaults(func=_cmd_simulate)


def _cmd_simulate(args: argparse.Namespace) -> None:
    agent: Agent = HeuristicAgent() if args.agent == "heuristic" else RandomAgent(seed=args.seed)
    session = Session(config=SessionConfig(human_seat=None, seed=args.seed), agent=agent)

    ledger_path = Path(args.ledger) if args.ledger else None
    if ledger_path is not None and ledger_path.exists():
        load_ledger(ledger_path, session)
        print(
            f"Resumed after deal {session.deal_number}: "
            f"NS={session.ledger.ns} EW={session.ledger.ew}"
        )

    for _ in range(args.deals):
        record = play_one_deal(session)
        print(_format_record(record, session.ledger.ns, session.ledger.ew), flush=True)

    print(f"Final score after {session.deal_number} deals: NS={session.ledger.ns} EW={session.ledger.ew}")

    if ledger_path is not None:
        save_ledger(session, ledger_path)
        print(f"Saved ledger to {ledger_path.resolve()}")


def _add_score_parser(subparsers: argparse._SubParsersAction) -> None:
    parser = subparsers.add_parser(
        "score",
        help="Compute the duplicate score of a contract.",
    )
    parser.add_argument(
        "contract",
        type=str,
        help='Contract such as "3NT", "4S", "5DX" or "6HXX".',
    )
    parser.add_argument(
        "--tricks",
        type=int,
        required=True,
        help="Tricks taken by the declaring side (0-13).",
    )
    parser.add_argument(
        "--vulnerable",
        action="store_true",
        help="Declaring side is vulnerable.",
    )
    parser.set_defaults(func=_cmd_score, parser=parser)


def _cmd_score(args: argparse.Namespace) -> None:
    try:
        contract = parse_contract(args.contract)
        score = score_contract(contract, args.tricks, args.vulnerable)
    except ValueError as exc:
        args.parser.error(str(exc))
    needed = contract.tricks_needed
    if args.tricks >= needed:
        result = "made" if args.tricks == needed else f"made +{args.tricks - needed}"
    else:
        result = f"down {needed - args.tricks}"
    vul = "vulnerable" if args.vulnerable else "not vulnerable"
    print(f"{contract.level}{contract.strain.symbol}{_doubling_suffix(contract)} {result}, {vul}: {score:+d}")


def _doubling_suffix(contract: Contract) -> str:
    if contract.redoubled:
        return "XX"
    if contract.doubled:
        return "X"
    return ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bridge", description="Contract bridge simulation and scoring CLI.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_simulate_parser(subparsers)
    _add_score_parser(subparsers)
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
