"""Sixes: four players, three 6-hole team games with rotating partners.

Game 1 pairs cart partners, game 2 crosses carts (cart 1 driver with cart 2
rider) and game 3 plays drivers against riders. Game boundaries follow the
group's play order, so a shotgun start on hole 16 plays game 1 over
16, 17, 18, 1, 2, 3.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from .models import Player, ScoreCard, Teebox
from .rules import DEFAULT_RULES, GameRules
from .settings import SixesSettings
from .strokes import sixes_game_holes

Winner = Literal["team1", "team2", "tie"]


class GameHoleRange(BaseModel):
    start_hole: int
    end_hole: int


class SixesHoleResult(BaseModel):
    hole: int
    team1: float
    team2: float
    team1_score: Optional[float]
    team2_score: Optional[float]
    winner: Winner


class SixesGameResult(BaseModel):
    game: int
    holes: List[int]
    team1: List[str]
    team2: List[str]
    team1_points: float
    team2_points: float
    result: int
    hole_results: List[SixesHoleResult]


def get_teams_for_game(
    game: int, players: Sequence[Player]
) -> Tuple[List[Player], List[Player]]:
    if game == 1:
        team1 = [p for p in players if p.cart == "1"]
        team2 = [p for p in players if p.cart == "2"]
    elif game == 2:
        team1 = [
            p
            for p in players
            if (p.cart, p.position) in {("1", "driver"), ("2", "rider")}
        ]
        team2 = [
            p
            for p in players
            if (p.cart, p.position) in {("2", "driver"), ("1", "rider")}
        ]
    elif game == 3:
        team1 = [p for p in players if p.position == "driver"]
        team2 = [p for p in players if p.position == "rider"]
    else:
        raise ValueError(f"unknown sixes game {game}")
    return team1, team2


def get_team_names(game: int, players: Sequence[Player]) -> str:
    team1, team2 = get_teams_for_game(game, players)
    left = "/".join(p.display_name for p in team1)
    right = "/".join(p.display_name for p in team2)
    return f"{left} vs {right}"


def get_game_number(
    hole: int, starting_hole: int = 1, *, rules: GameRules = DEFAULT_RULES
) -> int:
    offset = (hole - starting_hole) % rules.holes_per_round
    return offset // rules.holes_per_game + 1


def get_game_holes(
    game: int, starting_hole: int = 1, *, rules: GameRules = DEFAULT_RULES
) -> List[int]:
    return sixes_game_holes(starting_hole, rules=rules)[game - 1]


def get_game_hole_range(
    game: int, starting_hole: int = 1, *, rules: GameRules = DEFAULT_RULES
) -> GameHoleRange:
    """First and last hole of a game; ``end_hole < start_hole`` when it wraps."""

    holes = get_game_holes(game, starting_hole, rules=rules)
    return GameHoleRange(start_hole=holes[0], end_hole=holes[-1])


def get_net_score(
    player: Player,
    hole: int,
    scores: Mapping[str, ScoreCard],
    game: int,
    teebox: Optional[Teebox] = None,
    half_stroke_on_par3: bool = False,
) -> Optional[float]:
    card = scores.get(player.id)
    if card is None:
        return None
    gross = card.hole_score(hole)
    if gross is None:
        return None
    sixes = player.stroke_holes.sixes if player.stroke_holes else None
    if sixes is None or hole not in sixes.for_game(game):
        return float(gross)
    par3 = teebox is not None and teebox.hole(hole).par == 3
    relief = 0.5 if half_stroke_on_par3 and par3 else 1.0
    return gross - relief


def _team_score(
    team: Sequence[Player],
    hole: int,
    scores: Mapping[str, ScoreCard],
    game: int,
    teebox: Optional[Teebox],
    half_stroke: bool,
) -> Optional[float]:
    nets = [get_net_score(p, hole, scores, game, teebox, half_stroke) for p in team]
    usable = [n for n in nets if n is not None]
    return min(usable) if usable else None


def calculate_points(
    team1: Sequence[Player],
    team2: Sequence[Player],
    hole: int,
    scores: Mapping[str, ScoreCard],
    points_per_hole: Optional[int] = None,
    use_2_points: bool = True,
    *,
    game: Optional[int] = None,
    starting_hole: int = 1,
    teebox: Optional[Teebox] = None,
    half_stroke_on_par3: bool = False,
    rules: GameRules = DEFAULT_RULES,
) -> Optional[SixesHoleResult]:
    """Points for one hole (1-based), or ``None`` until all four have reported.

    Each team plays its best net ball. The lower team takes every point; a
    tie splits them in 2-point mode and pays nothing in 1-point mode. A team
    whose members all DNF the hole loses it.
    """

    for player in (*team1, *team2):
        card = scores.get(player.id)
        if card is None or not card.is_reported(hole):
            return None

    if points_per_hole is None:
        points_per_hole = 2 if use_2_points else 1
    if game is None:
        game = get_game_number(hole, starting_hole, rules=rules)

    score1 = _team_score(team1, hole, scores, game, teebox, half_stroke_on_par3)
    score2 = _team_score(team2, hole, scores, game, teebox, half_stroke_on_par3)

    if score1 == score2:
        share = points_per_hole / 2 if use_2_points else 0.0
        points1 = points2 = share
        winner: Winner = "tie"
    elif score2 is None or (score1 is not None and score1 < score2):
        points1, points2, winner = float(points_per_hole), 0.0, "team1"
    else:
        points1, points2, winner = 0.0, float(points_per_hole), "team2"

    return SixesHoleResult(
        hole=hole,
        team1=points1,
        team2=points2,
        team1_score=score1,
        team2_score=score2,
        winner=winner,
    )


def calculate_game_result(
    game: int,
    players: Sequence[Player],
    scores: Mapping[str, ScoreCard],
    settings: SixesSettings,
    *,
    starting_hole: int = 1,
    teebox: Optional[Teebox] = None,
    half_stroke_on_par3: bool = False,
    rules: GameRules = DEFAULT_RULES,
) -> SixesGameResult:
    """Tally one game; ``result`` is 1 when team 1 leads, -1 for team 2, 0 level."""

    team1, team2 = get_teams_for_game(game, players)
    holes = get_game_holes(game, starting_hole, rules=rules)
    hole_results: List[SixesHoleResult] = []
    for hole in holes:
        outcome = calculate_points(
            team1,
            team2,
            hole,
            scores,
            use_2_points=settings.use_2_points_per_game,
            game=game,
            teebox=teebox,
            half_stroke_on_par3=half_stroke_on_par3,
            rules=rules,
        )
        if outcome is not None:
            hole_results.append(outcome)

    points1 = sum(r.team1 for r in hole_results)
    points2 = sum(r.team2 for r in hole_results)
    result = 1 if points1 > points2 else -1 if points2 > points1 else 0
    return SixesGameResult(
        game=game,
        holes=holes,
        team1=[p.id for p in team1],
        team2=[p.id for p in team2],
        team1_points=points1,
        team2_points=points2,
        result=result,
        hole_results=hole_results,
    )


def calculate_sixes_results(
    players: Sequence[Player],
    scores: Mapping[str, ScoreCard],
    settings: SixesSettings,
    *,
    starting_hole: int = 1,
    teebox: Optional[Teebox] = None,
    half_stroke_on_par3: bool = False,
    rules: GameRules = DEFAULT_RULES,
) -> List[SixesGameResult]:
    return [
        calculate_game_result(
            game,
            players,
            scores,
            settings,
            starting_hole=starting_hole,
            teebox=teebox,
            half_stroke_on_par3=half_stroke_on_par3,
            rules=rules,
        )
        for game in range(1, rules.games_per_round + 1)
    ]


def calculate_sixes_payout(
    games: Sequence[SixesGameResult], amount_per_game: float
) -> Dict[str, float]:
    """Each winning-team member collects ``amount_per_game`` from a loser."""

    owed: Dict[str, float] = {}
    for game in games:
        for player_id in (*game.team1, *game.team2):
            owed.setdefault(player_id, 0.0)
        if game.result == 0:
            continue
        winners, losers = (
            (game.team1, game.team2) if game.result > 0 else (game.team2, game.team1)
        )
        for player_id in winners:
            owed[player_id] += amount_per_game
        for player_id in losers:
            owed[player_id] -= amount_per_game
    return owed


__all__ = [
    "GameHoleRange",
    "SixesGameResult",
    "SixesHoleResult",
    "calculate_game_result",
    "calculate_points",
    "calculate_sixes_payout",
    "calculate_sixes_results",
    "get_game_hole_range",
    "get_game_holes",
    "get_game_number",
    "get_net_score",
    "get_team_names",
    "get_teams_for_game",
]
