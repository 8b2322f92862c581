"""Skins: per-hole prizes for a sole low score, plus pot and payout math."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from .models import Player, Teebox
from .settings import ManualPot


class SkinResult(BaseModel):
    hole: int
    score: float


SkinsPoolResult = Dict[str, List[SkinResult]]


class AllSkins(BaseModel):
    scratch: SkinsPoolResult = Field(default_factory=dict)
    handicap: SkinsPoolResult = Field(default_factory=dict)


class PotStats(BaseModel):
    total_skins: int
    base_skin_value: float
    residual_amount: float


class PlayerSkinCount(BaseModel):
    player_id: str
    skin_count: int


def calculate_handicap_net_score(
    gross_score: float,
    player_handicap: float,
    lowest_handicap: float,
    hole_handicap_rating: int,
    hole_par: int,
    half_stroke_on_par3: bool = False,
) -> float:
    """Net score for handicap skins, relative to the pool's lowest handicap.

    A stroke is taken when the differential reaches the hole's rating; on a
    Par-3 with half strokes enabled that stroke is only worth half.
    """

    differential = player_handicap - lowest_handicap
    if differential < hole_handicap_rating:
        return gross_score
    relief = 0.5 if hole_par == 3 and half_stroke_on_par3 else 1.0
    return gross_score - relief


def calculate_pool_skins(
    players: Sequence[Player],
    teebox: Teebox,
    use_scratch: bool,
    half_stroke_on_par3: bool = False,
) -> SkinsPoolResult:
    """Skins won in one pool, keyed by player id.

    Holes where nobody has a usable score are skipped; a tie for the low
    score voids the skin. DNF players simply drop out of that hole.
    """

    skins: SkinsPoolResult = {}
    if not players:
        return skins

    lowest = min(p.tournament_handicap for p in players)
    for hole in teebox.holes:
        entries: List[tuple[str, float]] = []
        for player in players:
            gross = player.hole_score(hole.number)
            if gross is None:
                continue
            if use_scratch:
                value = float(gross)
            else:
                value = calculate_handicap_net_score(
                    gross,
                    player.tournament_handicap,
                    lowest,
                    hole.handicap_rating,
                    hole.par,
                    half_stroke_on_par3,
                )
            entries.append((player.id, value))

        if not entries:
            continue
        low = min(value for _, value in entries)
        leaders = [pid for pid, value in entries if value == low]
        if len(leaders) == 1:
            skins.setdefault(leaders[0], []).append(
                SkinResult(hole=hole.number, score=low)
            )
    return skins


def calculate_all_skins(
    players: Sequence[Player], teebox: Teebox, half_stroke_on_par3: bool = False
) -> AllSkins:
    scratch = [p for p in players if p.skins_pool in ("Scratch", "Both")]
    handicap = [p for p in players if p.skins_pool in ("Handicap", "Both")]
    return AllSkins(
        scratch=calculate_pool_skins(scratch, teebox, True, half_stroke_on_par3),
        handicap=calculate_pool_skins(handicap, teebox, False, half_stroke_on_par3),
    )


def calculate_pot_size(
    participants: Sequence[object],
    buy_in_per_player: float,
    manual_override: Optional[ManualPot] = None,
) -> float:
    if manual_override is not None and manual_override.enabled:
        return manual_override.amount
    return len(participants) * buy_in_per_player


def calculate_pot_stats(pot_size: float, total_skins: int) -> PotStats:
    if total_skins == 0:
        return PotStats(total_skins=0, base_skin_value=0, residual_amount=0)
    base = math.floor(pot_size / total_skins)
    return PotStats(
        total_skins=total_skins,
        base_skin_value=base,
        residual_amount=pot_size - base * total_skins,
    )


def calculate_skin_values(pot_size: float, total_skins: int) -> List[float]:
    """Per-skin values, highest first; the residual becomes +1 bumps.

    ``calculate_skin_values(100, 7)`` gives two 15s and five 14s.
    """

    if total_skins == 0:
        return []
    stats = calculate_pot_stats(pot_size, total_skins)
    bumps = int(stats.residual_amount)
    values = [stats.base_skin_value + 1] * bumps
    values += [stats.base_skin_value] * (total_skins - bumps)
    # A fractional pot leaves a sub-unit remainder; the top skin carries it.
    values[0] += stats.residual_amount - bumps
    return sorted(values, reverse=True)


def distribute_skin_values(
    players: Sequence[PlayerSkinCount], skin_values: Sequence[float]
) -> Dict[str, float]:
    """Hand out ``skin_values`` (highest first) to players with the fewest skins first.

    Ties on skin count fall back to player id so the split is deterministic.
    The earnings always sum to ``sum(skin_values)``.
    """

    ordered = sorted(players, key=lambda p: (p.skin_count, p.player_id))
    earnings: Dict[str, float] = {}
    cursor = 0
    for player in ordered:
        taken = skin_values[cursor : cursor + player.skin_count]
        earnings[player.player_id] = sum(taken)
        cursor += player.skin_count
    return earnings


def calculate_player_earnings(
    skins: SkinsPoolResult, pot_size: float
) -> Dict[str, float]:
    counts = [
        PlayerSkinCount(player_id=pid, skin_count=len(won))
        for pid, won in skins.items()
        if won
    ]
    total = sum(c.skin_count for c in counts)
    return distribute_skin_values(counts, calculate_skin_values(pot_size, total))


__all__ = [
    "AllSkins",
    "PlayerSkinCount",
    "PotStats",
    "SkinResult",
    "SkinsPoolResult",
    "calculate_all_skins",
    "calculate_handicap_net_score",
    "calculate_player_earnings",
    "calculate_pool_skins",
    "calculate_pot_size",
    "calculate_pot_stats",
    "calculate_skin_values",
    "distribute_skin_values",
]
