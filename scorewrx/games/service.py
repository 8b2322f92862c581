"""Run the enabled game engines over a tournament snapshot."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .dots import calculate_dots_payout, calculate_player_dots
from .leaderboard import LeaderboardEntry, build_leaderboard
from .models import Course, Group, Player, StrokeHoles, Teebox, scores_by_player, with_updates
from .nassau import (
    MatchStandings,
    calculate_nassau_payout,
    get_match_standings,
    make_net_score_fn,
)
from .nines import NinesRoundResult, calculate_nines_payout, calculate_round_points
from .rules import DEFAULT_RULES, GameRules
from .settings import GameSettings
from .sixes import (
    SixesGameResult,
    calculate_sixes_payout,
    calculate_sixes_results,
    get_teams_for_game,
)
from .skins import AllSkins, calculate_all_skins, calculate_player_earnings, calculate_pot_size
from .strokes import assign_group_stroke_holes

logger = logging.getLogger(__name__)


class NassauResult(BaseModel):
    player1: str
    player2: str
    standings: MatchStandings
    payout: Dict[str, float]


class NinesResult(BaseModel):
    points: NinesRoundResult
    payout: Dict[str, float]


class SixesResult(BaseModel):
    games: List[SixesGameResult]
    payout: Dict[str, float]


class DotsResult(BaseModel):
    hole_dots: Dict[str, List[int]]
    totals: Dict[str, int]
    payout: Dict[str, float]


class GroupResults(BaseModel):
    group_id: str
    stroke_holes: Dict[str, StrokeHoles]
    nassau: Optional[NassauResult] = None
    nines: Optional[NinesResult] = None
    sixes: Optional[SixesResult] = None
    dots: Optional[DotsResult] = None
    skipped: Dict[str, str] = Field(default_factory=dict)


class SkinsPoolPayout(BaseModel):
    pot: float
    skins: Dict[str, List[dict]]
    earnings: Dict[str, float]


class SkinsResult(BaseModel):
    scratch: SkinsPoolPayout
    handicap: SkinsPoolPayout


class TournamentSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    course: Course
    settings: GameSettings = Field(default_factory=GameSettings)
    groups: List[Group] = Field(default_factory=list)


class TournamentResults(BaseModel):
    tournament_id: Optional[str] = None
    groups: List[GroupResults]
    skins: Optional[SkinsResult] = None
    leaderboard: List[LeaderboardEntry]


def _sixes_ready(players: List[Player]) -> bool:
    for game in (1, 2, 3):
        team1, team2 = get_teams_for_game(game, players)
        if len(team1) != 2 or len(team2) != 2:
            return False
    return True


def score_group(
    group: Group,
    teebox: Teebox,
    settings: GameSettings,
    *,
    rules: GameRules = DEFAULT_RULES,
) -> GroupResults:
    """Standings and payouts for every enabled game the group can play."""

    group = assign_group_stroke_holes(group, settings, teebox, rules=rules)
    players = group.players
    scores = scores_by_player(players)
    half_stroke = settings.skins.use_half_stroke_on_par3
    results = GroupResults(
        group_id=group.id,
        stroke_holes={p.id: p.stroke_holes for p in players if p.stroke_holes},
    )

    nassau = settings.nassau
    if nassau.enabled:
        if len(players) == rules.players_nassau:
            player1, player2 = players
            net_fn = make_net_score_fn(players, scores, teebox, half_stroke)
            standings = get_match_standings(
                player1, player2, scores, nassau.match_type, net_fn, rules=rules
            )
            results.nassau = NassauResult(
                player1=player1.id,
                player2=player2.id,
                standings=standings,
                payout=calculate_nassau_payout(
                    player1, player2, standings, nassau.match_type, nassau.amount_per_game
                ),
            )
        else:
            results.skipped["nassau"] = "needs_two_players"

    nines = settings.nines
    if nines.enabled:
        if len(players) == rules.min_players_nines:
            points = calculate_round_points(players, scores, teebox, half_stroke, rules=rules)
            results.nines = NinesResult(
                points=points,
                payout=calculate_nines_payout(points.totals, nines.amount_per_point),
            )
        else:
            results.skipped["nines"] = "needs_three_players"

    sixes = settings.sixes
    if sixes.enabled:
        if len(players) == rules.min_players_sixes and _sixes_ready(players):
            games = calculate_sixes_results(
                players,
                scores,
                sixes,
                starting_hole=group.starting_tee,
                teebox=teebox,
                half_stroke_on_par3=half_stroke,
                rules=rules,
            )
            results.sixes = SixesResult(
                games=games, payout=calculate_sixes_payout(games, sixes.amount_per_game)
            )
        else:
            results.skipped["sixes"] = "needs_four_players_in_carts"

    dots = settings.dots
    if dots.enabled:
        hole_dots = {
            p.id: calculate_player_dots(
                p,
                teebox,
                players,
                track_greenies=dots.track_greenies,
                track_sandies=dots.track_sandies,
            )
            for p in players
        }
        scored = [with_updates(p, dots=hole_dots[p.id]) for p in players]
        group_ids = {p.id for p in players}
        participants = [pid for pid in dots.participants if pid in group_ids] or sorted(group_ids)
        results.dots = DotsResult(
            hole_dots=hole_dots,
            totals={pid: sum(values) for pid, values in hole_dots.items()},
            payout={
                p.id: calculate_dots_payout(p.id, scored, participants, dots.amount_per_dot)
                for p in scored
            },
        )

    if results.skipped:
        logger.debug("group %s skipped games: %s", group.id, results.skipped)
    return results


def _pool_payout(pool: Dict[str, list], pot: float) -> SkinsPoolPayout:
    return SkinsPoolPayout(
        pot=pot,
        skins={pid: [s.model_dump() for s in won] for pid, won in pool.items()},
        earnings=calculate_player_earnings(pool, pot),
    )


def score_skins(
    players: List[Player], teebox: Teebox, settings: GameSettings
) -> SkinsResult:
    skins = settings.skins
    won: AllSkins = calculate_all_skins(players, teebox, skins.use_half_stroke_on_par3)
    scratch_players = [p for p in players if p.skins_pool in ("Scratch", "Both")]
    handicap_players = [p for p in players if p.skins_pool in ("Handicap", "Both")]
    scratch_pot = calculate_pot_size(
        scratch_players, skins.scratch_buy_in, skins.manual_scratch_pot
    )
    handicap_pot = calculate_pot_size(
        handicap_players, skins.handicap_buy_in, skins.manual_handicap_pot
    )
    return SkinsResult(
        scratch=_pool_payout(won.scratch, scratch_pot),
        handicap=_pool_payout(won.handicap, handicap_pot),
    )


def score_tournament(
    snapshot: TournamentSnapshot, *, rules: GameRules = DEFAULT_RULES
) -> TournamentResults:
    teebox = snapshot.course.primary_teebox
    groups = [
        score_group(group, teebox, snapshot.settings, rules=rules)
        for group in snapshot.groups
    ]
    everyone = [p for group in snapshot.groups for p in group.players]
    skins = score_skins(everyone, teebox, snapshot.settings) if snapshot.settings.skins.enabled else None
    logger.info(
        "scored tournament %s: %d groups, %d players",
        snapshot.id or "-",
        len(groups),
        len(everyone),
    )
    return TournamentResults(
        tournament_id=snapshot.id,
        groups=groups,
        skins=skins,
        leaderboard=build_leaderboard(everyone, teebox, rules=rules),
    )


__all__ = [
    "DotsResult",
    "GroupResults",
    "NassauResult",
    "NinesResult",
    "SixesResult",
    "SkinsPoolPayout",
    "SkinsResult",
    "TournamentResults",
    "TournamentSnapshot",
    "score_group",
    "score_skins",
    "score_tournament",
]
