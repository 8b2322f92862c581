"""Handicap stroke allocation for every game format.

Stroke counts are always whole numbers: fractional ``Standard`` handicaps only
influence comparisons (who is lowest in the group) before the final floor.
Strokes land on holes in ascending ``handicap_rating`` order (rating 1 first).
Segment-bounded formats (Sixes games) walk the round in play order from the
group's starting tee so shotgun starts wrap past hole 18.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Sequence

from .models import (
    Group,
    HandicapFormat,
    Hole,
    Player,
    SixesStrokeHoles,
    StrokeHoles,
    Teebox,
)
from .rules import DEFAULT_RULES, GameRules
from .settings import GameSettings

SIXES_GAME_KEYS = ("first_game", "second_game", "third_game")


def calculate_player_handicap(
    player: Optional[Player], fmt: HandicapFormat = "Standard"
) -> float:
    """``Custom`` floors the handicap; ``Standard`` keeps it as entered."""

    handicap = player.tournament_handicap if player is not None else 0.0
    return math.floor(handicap) if fmt == "Custom" else handicap


def get_lowest_handicap(players: Iterable[Player], fmt: HandicapFormat = "Standard") -> float:
    values = [calculate_player_handicap(p, fmt) for p in players]
    return min(values) if values else 0.0


def cap_strokes(strokes: float, rules: GameRules = DEFAULT_RULES) -> int:
    return int(min(max(strokes, 0), rules.max_strokes))


def calculate_total_strokes(
    player: Player,
    players: Iterable[Player],
    use_differential: bool,
    fmt: HandicapFormat = "Standard",
    *,
    rules: GameRules = DEFAULT_RULES,
) -> int:
    """Whole strokes a player receives for the round, clamped to ``[0, max]``."""

    handicap = calculate_player_handicap(player, fmt)
    if use_differential:
        handicap -= get_lowest_handicap(players, fmt)
    return cap_strokes(math.floor(handicap), rules)


def play_order(starting_hole: int = 1, holes_per_round: int = 18) -> List[int]:
    """Hole numbers in the order a group starting on ``starting_hole`` plays them."""

    start = (starting_hole - 1) % holes_per_round
    return [((start + i) % holes_per_round) + 1 for i in range(holes_per_round)]


def segment_holes(
    start_hole: int, length: int, holes_per_round: int = 18
) -> List[int]:
    return play_order(start_hole, holes_per_round)[:length]


def _by_rating(holes: Iterable[Hole]) -> List[Hole]:
    return sorted(holes, key=lambda h: (h.handicap_rating, h.number))


def _in_play_order(numbers: Iterable[int], starting_hole: int, holes_per_round: int) -> List[int]:
    chosen = set(numbers)
    return [n for n in play_order(starting_hole, holes_per_round) if n in chosen]


def distribute_strokes(
    total_strokes: int,
    holes: Sequence[Hole],
    starting_hole: int = 1,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> List[int]:
    """Hole numbers receiving a stroke, in play order from ``starting_hole``.

    The result always has ``min(cap_strokes(total_strokes), len(holes))``
    unique entries, and the set for ``n`` strokes is contained in the set for
    ``n + 1``.
    """

    count = cap_strokes(total_strokes, rules)
    chosen = [h.number for h in _by_rating(holes)[:count]]
    return _in_play_order(chosen, starting_hole, rules.holes_per_round)


def sixes_game_holes(
    starting_hole: int = 1, *, rules: GameRules = DEFAULT_RULES
) -> List[List[int]]:
    """The three Sixes games as lists of hole numbers in play order."""

    order = play_order(starting_hole, rules.holes_per_round)
    size = rules.holes_per_game
    return [order[i * size : (i + 1) * size] for i in range(rules.games_per_round)]


def distribute_sixes_strokes(
    total_strokes: int,
    holes: Sequence[Hole],
    starting_hole: int = 1,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> SixesStrokeHoles:
    """Split a round's strokes across the three 6-hole Sixes games.

    Each game gets ``total // 3``; the remainder goes to the earliest game(s)
    in play order. Within a game strokes land on its lowest-rated holes.
    """

    total = cap_strokes(total_strokes, rules)
    by_number: Dict[int, Hole] = {h.number: h for h in holes}
    games = sixes_game_holes(starting_hole, rules=rules)
    base, remainder = divmod(total, len(games))

    allocation: Dict[str, List[int]] = {}
    for index, (key, game) in enumerate(zip(SIXES_GAME_KEYS, games)):
        count = base + (1 if index < remainder else 0)
        game_holes = [by_number[n] for n in game if n in by_number]
        chosen = {h.number for h in _by_rating(game_holes)[:count]}
        allocation[key] = [n for n in game if n in chosen]
    return SixesStrokeHoles(**allocation)


def distribute_dots_strokes(
    total_strokes: int, holes: Sequence[Hole], *, rules: GameRules = DEFAULT_RULES
) -> List[int]:
    return distribute_strokes(total_strokes, holes, rules=rules)


def distribute_nines_strokes(
    total_strokes: int, holes: Sequence[Hole], *, rules: GameRules = DEFAULT_RULES
) -> List[int]:
    return distribute_strokes(total_strokes, holes, rules=rules)


def distribute_nassau_strokes(
    total_strokes: int, holes: Sequence[Hole], *, rules: GameRules = DEFAULT_RULES
) -> Dict[str, List[int]]:
    """Nassau stroke holes reported per half (``front``/``back``) and overall."""

    overall = distribute_strokes(total_strokes, holes, rules=rules)
    front_lo, front_hi = rules.front_nine
    back_lo, back_hi = rules.back_nine
    return {
        "front": [n for n in overall if front_lo <= n <= front_hi],
        "back": [n for n in overall if back_lo <= n <= back_hi],
        "overall": overall,
    }


def allocate_stroke_holes(
    player: Player,
    group: Group,
    settings: GameSettings,
    teebox: Teebox,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> StrokeHoles:
    """Stroke holes for every enabled format, each using its own differential mode."""

    fmt = settings.handicap_format
    players = group.players

    def total(use_differential: bool) -> int:
        return calculate_total_strokes(player, players, use_differential, fmt, rules=rules)

    sixes = nines = dots = nassau = None
    if settings.sixes.enabled:
        sixes = distribute_sixes_strokes(
            total(settings.sixes.use_differential_handicap),
            teebox.holes,
            group.starting_tee,
            rules=rules,
        )
    if settings.nines.enabled:
        nines = distribute_nines_strokes(
            total(settings.nines.use_differential_handicap), teebox.holes, rules=rules
        )
    if settings.dots.enabled:
        dots = distribute_dots_strokes(
            total(settings.dots.use_differential_handicap), teebox.holes, rules=rules
        )
    if settings.nassau.enabled:
        nassau = distribute_nassau_strokes(
            total(settings.nassau.use_differential_handicap), teebox.holes, rules=rules
        )["overall"]
    return StrokeHoles(sixes=sixes, nines=nines, dots=dots, nassau=nassau)


def assign_group_stroke_holes(
    group: Group,
    settings: GameSettings,
    teebox: Teebox,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> Group:
    """Return a copy of ``group`` where every player has stroke holes.

    Players that already carry an assignment keep it unchanged; allocations
    are never recomputed from a partially scored round.
    """

    players = []
    for player in group.players:
        if player.stroke_holes is None:
            holes = allocate_stroke_holes(player, group, settings, teebox, rules=rules)
            player = player.model_copy(update={"stroke_holes": holes})
        players.append(player)
    return group.model_copy(update={"players": players})


__all__ = [
    "SIXES_GAME_KEYS",
    "allocate_stroke_holes",
    "assign_group_stroke_holes",
    "calculate_player_handicap",
    "calculate_total_strokes",
    "cap_strokes",
    "distribute_dots_strokes",
    "distribute_nassau_strokes",
    "distribute_nines_strokes",
    "distribute_sixes_strokes",
    "distribute_strokes",
    "get_lowest_handicap",
    "play_order",
    "segment_holes",
    "sixes_game_holes",
]
