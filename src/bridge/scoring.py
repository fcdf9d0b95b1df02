"""
Duplicate scoring: trick score, game/part-score bonus, slam, insult, overtricks, undertricks.
Per trick: 20 for minors, 30 for majors and NT (+10 once for NT). Doubled ×2, redoubled ×4.
Positive = declaring side scores; negative = the opponents score the magnitude.
"""
from __future__ import annotations

from .bidding import Contract, Strain
from .deal import Side

MINOR_TRICK_VALUE = 20
MAJOR_TRICK_VALUE = 30
NOTRUMP_FIRST_TRICK_EXTRA = 10

GAME_THRESHOLD = 100
PARTSCORE_BONUS = 50
GAME_BONUS = {False: 300, True: 500}
SMALL_SLAM_BONUS = {False: 500, True: 750}
GRAND_SLAM_BONUS = {False: 1000, True: 1500}
INSULT_DOUBLED = 50
INSULT_REDOUBLED = 100

# Per overtrick when (re)doubled, keyed by vulnerability.
DOUBLED_OVERTRICK = {False: 100, True: 200}
REDOUBLED_OVERTRICK = {False: 200, True: 400}

UNDOUBLED_UNDERTRICK = {False: 50, True: 100}
DOUBLED_UNDERTRICK_VUL = 200
# Not vulnerable, doubled: 1 down 100, 2 down 300, 3 down 500, then +300 each.
DOUBLED_NONVUL_FIRST_THREE = (100, 300, 500)
DOUBLED_NONVUL_BEYOND_THREE = 300


def trick_value(strain: Strain) -> int:
    """Value of one trick over book in this strain (undoubled, NT extra not included)."""
    return MINOR_TRICK_VALUE if strain.is_minor() else MAJOR_TRICK_VALUE


def contract_trick_score(contract: Contract) -> int:
    """Score for the contracted tricks: value × level (+10 in NT), ×2 doubled, ×4 redoubled."""
    score = trick_value(contract.strain) * contract.level
    if contract.strain is Strain.NOTRUMP:
        score += NOTRUMP_FIRST_TRICK_EXTRA
    if contract.redoubled:
        score *= 4
    elif contract.doubled:
        score *= 2
    return score


def overtrick_score(contract: Contract, overtricks: int, vulnerable: bool) -> int:
    if overtricks <= 0:
        return 0
    if contract.redoubled:
        return overtricks * REDOUBLED_OVERTRICK[vulnerable]
    if contract.doubled:
        return overtricks * DOUBLED_OVERTRICK[vulnerable]
    return overtricks * trick_value(contract.strain)


def made_contract_score(contract: Contract, tricks_won: int, vulnerable: bool) -> int:
    """Total for a made contract: trick score + game/part-score + slam + insult + overtricks."""
    trick_score = contract_trick_score(contract)
    bonus = GAME_BONUS[vulnerable] if trick_score >= GAME_THRESHOLD else PARTSCORE_BONUS
    if contract.level == 6:
        bonus += SMALL_SLAM_BONUS[vulnerable]
    elif contract.level == 7:
        bonus += GRAND_SLAM_BONUS[vulnerable]
    insult = 0
    if contract.redoubled:
        insult = INSULT_REDOUBLED
    elif contract.doubled:
        insult = INSULT_DOUBLED
    overtricks = tricks_won - contract.tricks_needed
    return trick_score + bonus + insult + overtrick_score(contract, overtricks, vulnerable)


def undertrick_penalty(contract: Contract, undertricks: int, vulnerable: bool) -> int:
    """Penalty (positive number) for going ``undertricks`` down."""
    if undertricks <= 0:
        return 0
    if not contract.doubled and not contract.redoubled:
        return undertricks * UNDOUBLED_UNDERTRICK[vulnerable]
    if vulnerable:
        penalty = undertricks * DOUBLED_UNDERTRICK_VUL
    elif undertricks <= 3:
        penalty = DOUBLED_NONVUL_FIRST_THREE[undertricks - 1]
    else:
        penalty = DOUBLED_NONVUL_FIRST_THREE[-1] + (undertricks - 3) * DOUBLED_NONVUL_BEYOND_THREE
    if contract.redoubled:
        penalty *= 2
    return penalty


def score_contract(contract: Contract, tricks_won: int, vulnerable: bool) -> int:
    """
    Signed score from the declaring side's point of view.
    tricks_won: tricks taken by the declaring side (0..13).
    """
    if not 0 <= tricks_won <= 13:
        raise ValueError(f"tricks_won must be in 0..13, got {tricks_won}")
    if tricks_won >= contract.tricks_needed:
        return made_contract_score(contract, tricks_won, vulnerable)
    return -undertrick_penalty(contract, contract.tricks_needed - tricks_won, vulnerable)


def credit_sides(contract: Contract, score: int) -> dict[Side, int]:
    """
    Points credited to each side for a deal: a positive score goes to the declaring
    side, a negative one is credited (as a positive amount) to the opponents.
    """
    credit = {Side.NS: 0, Side.EW: 0}
    if score > 0:
        credit[contract.side] += score
    elif score < 0:
        credit[contract.side.opponents] += -score
    return credit


__all__ = [
    "contract_trick_score",
    "credit_sides",
    "made_contract_score",
    "overtrick_score",
    "score_contract",
    "trick_value",
    "undertrick_penalty",
]
