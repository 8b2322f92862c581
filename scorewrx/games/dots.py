"""Dots: per-hole bonus points for birdies, greenies and sandies."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from .models import Player, ScoreCard, Teebox


class DotsValidation(BaseModel):
    is_valid: bool
    error: Optional[str] = None


class GreenieCandidate(BaseModel):
    id: str
    name: str
    score: int


def calculate_dots(
    score: Optional[int],
    par: int,
    greenie: bool,
    sandy: bool,
    dnf: bool,
    carry_over_dots: int = 0,
) -> int:
    """Dots earned on one hole.

    Two or more under par is worth 2, one under is worth 1. A greenie and a
    sandy add one each; carried-over Par-3 dots only ride along with a greenie.
    """

    if dnf or score is None:
        return 0

    under = par - score
    if under >= 2:
        dots = 2
    elif under == 1:
        dots = 1
    else:
        dots = 0

    if greenie:
        dots += 1 + max(carry_over_dots, 0)
    if sandy:
        dots += 1
    return dots


def validate_dots_entry(
    score: Optional[int], par: int, greenie: bool, sandy: bool
) -> DotsValidation:
    if score is not None and score > par:
        if greenie:
            return DotsValidation(is_valid=False, error="Greenie not allowed when score > par")
        if sandy:
            return DotsValidation(is_valid=False, error="Sandy not allowed when score > par")
    if par == 3 and greenie and sandy:
        return DotsValidation(
            is_valid=False, error="Cannot have both greenie and sandy on Par 3"
        )
    return DotsValidation(is_valid=True)


def get_max_score(par: int, hole_handicap_rating: int, player_handicap: float) -> int:
    """Capped score for a hole: par + 2 without a stroke there, par + 3 with one."""

    if player_handicap < hole_handicap_rating:
        return par + 2
    return par + 3


def get_eligible_players_for_greenie(
    players: Iterable[Player],
    hole_index: int,
    scores: Mapping[str, ScoreCard],
) -> List[GreenieCandidate]:
    """Players who finished the hole (0-based ``hole_index``) in 3 or fewer."""

    eligible: List[GreenieCandidate] = []
    for player in players:
        card = scores.get(player.id)
        if card is None:
            continue
        score = card.hole_score(hole_index + 1)
        if score is not None and score <= 3:
            eligible.append(
                GreenieCandidate(id=player.id, name=player.display_name, score=score)
            )
    return eligible


def calculate_carry_over(
    hole_number: int, teebox: Teebox, players: Sequence[Player]
) -> int:
    """Unclaimed Par-3 greenies rolling into ``hole_number``.

    Counts consecutive earlier Par-3 holes on which nobody took a greenie,
    stopping at the first one that was claimed. Non Par-3 holes carry nothing.
    """

    if teebox.hole(hole_number).par != 3:
        return 0

    carried = 0
    for number in range(hole_number - 1, 0, -1):
        if teebox.hole(number).par != 3:
            continue
        if any(number in p.greenies for p in players):
            break
        carried += 1
    return carried


def calculate_player_dots(
    player: Player,
    teebox: Teebox,
    players: Sequence[Player],
    *,
    track_greenies: bool = True,
    track_sandies: bool = True,
) -> List[int]:
    """Dots for each of the player's 18 holes from their score and bonus marks."""

    dots: List[int] = []
    for hole in teebox.holes:
        greenie = track_greenies and hole.number in player.greenies
        sandy = track_sandies and hole.number in player.sandies
        carry = calculate_carry_over(hole.number, teebox, players) if greenie else 0
        dots.append(
            calculate_dots(
                player.score[hole.number - 1],
                hole.par,
                greenie,
                sandy,
                player.is_dnf(hole.number),
                carry,
            )
        )
    return dots


def total_dots(player: Player) -> int:
    return sum(player.dots)


def calculate_dots_payout(
    player_id: str,
    players: Sequence[Player],
    participants: Iterable[str],
    amount_per_dot: float,
) -> float:
    """Net winnings: dot differential against every other participant."""

    selected = set(participants)
    if player_id not in selected:
        return 0.0
    by_id = {p.id: p for p in players}
    player = by_id.get(player_id)
    if player is None:
        return 0.0

    mine = total_dots(player)
    payout = 0.0
    for other_id in sorted(selected):
        other = by_id.get(other_id)
        if other is None or other_id == player_id:
            continue
        payout += (mine - total_dots(other)) * amount_per_dot
    return payout


__all__ = [
    "DotsValidation",
    "GreenieCandidate",
    "calculate_carry_over",
    "calculate_dots",
    "calculate_dots_payout",
    "calculate_player_dots",
    "get_eligible_players_for_greenie",
    "get_max_score",
    "total_dots",
    "validate_dots_entry",
]
