"""
Score ledger serialization.

Only the running session score and the deal counter are saved; hands, auctions
and tricks are never persisted. A saved ledger lets a session continue where it
stopped (same dealer / vulnerability rotation, same totals).
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from .game import Session

SCHEMA_VERSION = 1


def ledger_to_dict(session: Session) -> Dict[str, Any]:
    """
    Serialize a session's score ledger to a JSON-compatible dict.

    Returns:
        Dict with schema_version, saved_at, deal_number and the ns/ew totals.
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "saved_at": datetime.now(timezone.utc).isoformat(),
        "deal_number": session.deal_number,
        "scores": {"ns": session.ledger.ns, "ew": session.ledger.ew},
    }


def ledger_from_dict(d: Dict[str, Any], session: Session) -> Session:
    """
    Restore a ledger produced by ``ledger_to_dict`` into ``session``.

    Raises:
        ValueError: unknown schema version or missing/invalid fields.
    """
    version = d.get("schema_version")
    if version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported ledger schema version: {version!r}")
    try:
        deal_number = int(d["deal_number"])
        ns = int(d["scores"]["ns"])
        ew = int(d["scores"]["ew"])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed ledger data: {exc}") from exc
    session.resume(deal_number, ns=ns, ew=ew)
    return session


def ledger_to_json(session: Session) -> str:
    return json.dumps(ledger_to_dict(session), indent=2)


def ledger_from_json(s: str, session: Session) -> Session:
    return ledger_from_dict(json.loads(s), session)


def save_ledger(session: Session, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(ledger_to_json(session), encoding="utf-8")


def load_ledger(path: Path, session: Session) -> Session:
    return ledger_from_json(path.read_text(encoding="utf-8"), session)


__all__ = [
    "SCHEMA_VERSION",
    "ledger_from_dict",
    "ledger_from_json",
    "ledger_to_dict",
    "ledger_to_json",
    "load_ledger",
    "save_ledger",
]
