"""Net-score leaderboard with back-nine, last-six and gross tiebreakers."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .dots import get_max_score
from .models import Player, Teebox
from .rules import DEFAULT_RULES, GameRules


class LeaderboardEntry(BaseModel):
    position: int
    player_id: str
    name: str
    gross_score: int
    net_score: float
    holes_played: int
    relative_to_par: int
    net_relative_to_par: float
    back_nine_net: float
    last_six_net: float


class AdjustedScoreCard(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_id: str
    handicap: float
    holes: List[Optional[int]]
    out: int
    in_: int = Field(alias="in")
    total: int


def _window_net(
    player: Player,
    teebox: Teebox,
    window: Tuple[int, int],
    divisor: int,
    sentinel: int,
) -> float:
    numbers = range(window[0], window[1] + 1)
    played = [player.hole_score(n) for n in numbers]
    played = [s for s in played if s is not None]
    if not played:
        return sentinel
    allowance = math.floor(player.tournament_handicap / divisor)
    return sum(played) - allowance - teebox.par_for(numbers)


def back_nine_net(
    player: Player, teebox: Teebox, *, rules: GameRules = DEFAULT_RULES
) -> float:
    """Back-nine gross less half the handicap, relative to back-nine par."""

    return _window_net(player, teebox, rules.back_nine, 2, rules.missing_window_sentinel)


def last_six_net(
    player: Player, teebox: Teebox, *, rules: GameRules = DEFAULT_RULES
) -> float:
    """Last-six gross less a third of the handicap, relative to their par."""

    return _window_net(player, teebox, rules.last_six, 3, rules.missing_window_sentinel)


def build_leaderboard(
    players: Iterable[Player], teebox: Teebox, *, rules: GameRules = DEFAULT_RULES
) -> List[LeaderboardEntry]:
    """Rank every player with at least one valid hole.

    Ties on net score fall to the back-nine net, then the last-six net, then
    the lower gross. A player who has not played a tiebreak window loses it.
    """

    course_par = teebox.par
    rows = []
    for player in players:
        scores = [player.hole_score(n) for n in range(1, rules.holes_per_round + 1)]
        scores = [s for s in scores if s is not None]
        if not scores:
            continue
        gross = sum(scores)
        net = gross - player.tournament_handicap
        rows.append(
            (
                (
                    net,
                    back_nine_net(player, teebox, rules=rules),
                    last_six_net(player, teebox, rules=rules),
                    gross,
                ),
                player,
                len(scores),
            )
        )

    rows.sort(key=lambda row: row[0])
    return [
        LeaderboardEntry(
            position=index + 1,
            player_id=player.id,
            name=player.display_name,
            gross_score=key[3],
            net_score=key[0],
            holes_played=played,
            relative_to_par=key[3] - course_par,
            net_relative_to_par=key[0] - course_par,
            back_nine_net=key[1],
            last_six_net=key[2],
        )
        for index, (key, player, played) in enumerate(rows)
    ]


def adjusted_score_card(
    player: Player, teebox: Teebox, *, rules: GameRules = DEFAULT_RULES
) -> AdjustedScoreCard:
    """Scores capped at :func:`get_max_score` with out/in/total sums."""

    capped: List[Optional[int]] = []
    for hole in teebox.holes:
        score = player.score[hole.number - 1]
        if score is None:
            capped.append(None)
            continue
        limit = get_max_score(hole.par, hole.handicap_rating, player.tournament_handicap)
        capped.append(min(score, limit))

    split = rules.front_nine[1]
    out = sum(s for s in capped[:split] if s is not None)
    in_ = sum(s for s in capped[split:] if s is not None)
    return AdjustedScoreCard(
        player_id=player.id,
        handicap=player.tournament_handicap,
        holes=capped,
        out=out,
        in_=in_,
        total=out + in_,
    )


__all__ = [
    "AdjustedScoreCard",
    "LeaderboardEntry",
    "adjusted_score_card",
    "back_nine_net",
    "build_leaderboard",
    "last_six_net",
]
