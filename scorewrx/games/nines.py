"""Nines: three players split 9 points on every hole."""

from __future__ import annotations

from itertools import groupby
from typing import Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from .models import Player, ScoreCard, Teebox
from .rules import DEFAULT_RULES, GameRules


class NinesPointResult(BaseModel):
    player_id: str
    points: float


class NinesRoundResult(BaseModel):
    hole_points: List[Optional[List[NinesPointResult]]]
    totals: Dict[str, float]


def _net_score(
    player: Player, gross: int, hole: int, teebox: Optional[Teebox], half_stroke: bool
) -> float:
    stroke_holes = player.stroke_holes.nines if player.stroke_holes else None
    if not stroke_holes or hole not in stroke_holes:
        return float(gross)
    par3 = teebox is not None and teebox.hole(hole).par == 3
    relief = 0.5 if half_stroke and par3 else 1.0
    return gross - relief


def _rank_points(
    nets: Sequence[tuple[str, float]], pool: float, slots: Sequence[int]
) -> Dict[str, float]:
    """Share ``pool`` by rank; tied players split the slots they occupy."""

    values = list(slots[: len(nets)])
    values[-1] += pool - sum(values)

    ordered = sorted(nets, key=lambda item: item[1])
    awarded: Dict[str, float] = {}
    rank = 0
    for _net, tied in groupby(ordered, key=lambda item: item[1]):
        members = list(tied)
        share = values[rank : rank + len(members)]
        each = sum(share) / len(members)
        for player_id, _ in members:
            awarded[player_id] = each
        rank += len(members)
    return awarded


def calculate_points(
    players: Sequence[Player],
    scores: Mapping[str, ScoreCard],
    hole_index: int,
    teebox: Optional[Teebox] = None,
    half_stroke_on_par3: bool = False,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> Optional[List[NinesPointResult]]:
    """Points for one hole (0-based ``hole_index``) or ``None`` until all report.

    Distinct nets pay 5/3/1. A DNF player takes exactly 1 point and the
    others share the remainder over the top slots, so the hole still totals 9.
    """

    if not players:
        return None

    hole = hole_index + 1
    total_pool = sum(rules.nines_points)
    dnf_ids: List[str] = []
    nets: List[tuple[str, float]] = []
    for player in players:
        card = scores.get(player.id)
        if card is None or not card.is_reported(hole):
            return None
        if card.is_dnf(hole):
            dnf_ids.append(player.id)
            continue
        net = _net_score(
            player, card.hole_score(hole), hole, teebox, half_stroke_on_par3
        )
        nets.append((player.id, net))

    awarded: Dict[str, float] = {pid: float(rules.nines_dnf_points) for pid in dnf_ids}
    if nets:
        pool = total_pool - rules.nines_dnf_points * len(dnf_ids)
        awarded.update(_rank_points(nets, pool, rules.nines_points))

    return [NinesPointResult(player_id=p.id, points=awarded[p.id]) for p in players]


def calculate_round_points(
    players: Sequence[Player],
    scores: Mapping[str, ScoreCard],
    teebox: Optional[Teebox] = None,
    half_stroke_on_par3: bool = False,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> NinesRoundResult:
    totals: Dict[str, float] = {p.id: 0.0 for p in players}
    hole_points: List[Optional[List[NinesPointResult]]] = []
    for index in range(rules.holes_per_round):
        points = calculate_points(
            players, scores, index, teebox, half_stroke_on_par3, rules=rules
        )
        hole_points.append(points)
        for result in points or []:
            totals[result.player_id] += result.points
    return NinesRoundResult(hole_points=hole_points, totals=totals)


def calculate_nines_payout(
    totals: Mapping[str, float], amount_per_point: float
) -> Dict[str, float]:
    """Money per player: points above or below the group average, times the stake."""

    if not totals:
        return {}
    average = sum(totals.values()) / len(totals)
    return {pid: (points - average) * amount_per_point for pid, points in totals.items()}


__all__ = [
    "NinesPointResult",
    "NinesRoundResult",
    "calculate_nines_payout",
    "calculate_points",
    "calculate_round_points",
]
