"""Nassau: two-player match play over the front nine, back nine and 18."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional, Sequence

from pydantic import BaseModel

from .models import Player, ScoreCard, Teebox
from .rules import DEFAULT_RULES, GameRules
from .settings import MatchType

NetScoreFn = Callable[[str, int], Optional[float]]


class MatchStandings(BaseModel):
    """Holes up for player 1 (negative when player 2 leads)."""

    front: int
    back: int
    overall: int


def calculate_match_standing(
    player1: Player,
    player2: Player,
    scores: Mapping[str, ScoreCard],
    start_hole: int,
    end_hole: int,
    net_score_fn: NetScoreFn,
) -> int:
    """Cumulative standing over ``start_hole..end_hole`` inclusive.

    A hole counts only when both players have a usable net score; a halved
    hole leaves the standing unchanged.
    """

    card1 = scores.get(player1.id)
    card2 = scores.get(player2.id)
    if card1 is None or card2 is None:
        return 0

    standing = 0
    for hole in range(start_hole, end_hole + 1):
        if card1.hole_score(hole) is None or card2.hole_score(hole) is None:
            continue
        net1 = net_score_fn(player1.id, hole)
        net2 = net_score_fn(player2.id, hole)
        if net1 is None or net2 is None:
            continue
        if net1 < net2:
            standing += 1
        elif net2 < net1:
            standing -= 1
    return standing


def get_match_standings(
    player1: Player,
    player2: Player,
    scores: Mapping[str, ScoreCard],
    match_type: MatchType,
    net_score_fn: NetScoreFn,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> MatchStandings:
    front = calculate_match_standing(
        player1, player2, scores, *rules.front_nine, net_score_fn
    )
    back = calculate_match_standing(
        player1, player2, scores, *rules.back_nine, net_score_fn
    )
    if match_type == "frontback":
        overall = front + back
    else:
        overall = calculate_match_standing(
            player1, player2, scores, rules.front_nine[0], rules.back_nine[1], net_score_fn
        )
    return MatchStandings(front=front, back=back, overall=overall)


def make_net_score_fn(
    players: Sequence[Player],
    scores: Mapping[str, ScoreCard],
    teebox: Teebox,
    half_stroke_on_par3: bool = False,
) -> NetScoreFn:
    """Net score lookup driven by each player's Nassau stroke holes."""

    by_id = {p.id: p for p in players}

    def net_score(player_id: str, hole: int) -> Optional[float]:
        player = by_id.get(player_id)
        card = scores.get(player_id)
        if player is None or card is None:
            return None
        gross = card.hole_score(hole)
        if gross is None:
            return None
        stroke_holes = player.stroke_holes.nassau if player.stroke_holes else None
        if not stroke_holes or hole not in stroke_holes:
            return float(gross)
        relief = 0.5 if half_stroke_on_par3 and teebox.hole(hole).par == 3 else 1.0
        return gross - relief

    return net_score


def calculate_nassau_payout(
    player1: Player,
    player2: Player,
    standings: MatchStandings,
    match_type: MatchType,
    amount_per_game: float,
) -> Dict[str, float]:
    """Money won per player; each bet in play goes to whoever leads it."""

    if match_type == "all":
        bets = [standings.front, standings.back, standings.overall]
    elif match_type == "frontback":
        bets = [standings.front, standings.back]
    else:
        bets = [standings.overall]

    owed = {player1.id: 0.0, player2.id: 0.0}
    for standing in bets:
        if standing > 0:
            owed[player1.id] += amount_per_game
        elif standing < 0:
            owed[player2.id] += amount_per_game
    return owed


__all__ = [
    "MatchStandings",
    "NetScoreFn",
    "calculate_match_standing",
    "calculate_nassau_payout",
    "get_match_standings",
    "make_net_score_fn",
]
