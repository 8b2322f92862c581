import pytest

from scorewrx.games.models import SixesStrokeHoles, StrokeHoles, scores_by_player
from scorewrx.games.settings import SixesSettings
from scorewrx.games.sixes import (
    calculate_points,
    calculate_sixes_payout,
    calculate_sixes_results,
    get_game_hole_range,
    get_game_number,
    get_team_names,
    get_teams_for_game,
)


@pytest.fixture
def foursome(make_player):
    def build(cards=None, **overrides):
        cards = cards or {}
        seats = {
            "a": ("1", "driver"),
            "b": ("1", "rider"),
            "c": ("2", "driver"),
            "d": ("2", "rider"),
        }
        players = []
        for pid, (cart, position) in seats.items():
            players.append(
                make_player(
                    pid,
                    cards.get(pid),
                    cart=cart,
                    position=position,
                    **overrides.get(pid, {}),
                )
            )
        return players

    return build


def _ids(team):
    return [p.id for p in team]


def test_teams_rotate_between_games(foursome) -> None:
    players = foursome()
    game1 = get_teams_for_game(1, players)
    game2 = get_teams_for_game(2, players)
    game3 = get_teams_for_game(3, players)
    assert (_ids(game1[0]), _ids(game1[1])) == (["a", "b"], ["c", "d"])
    assert (_ids(game2[0]), _ids(game2[1])) == (["a", "d"], ["b", "c"])
    assert (_ids(game3[0]), _ids(game3[1])) == (["a", "c"], ["b", "d"])
    assert get_team_names(1, players) == "A/B vs C/D"

    with pytest.raises(ValueError):
        get_teams_for_game(4, players)


def test_game_numbers_follow_play_order() -> None:
    assert [get_game_number(h) for h in (1, 6, 7, 12, 13, 18)] == [1, 1, 2, 2, 3, 3]
    assert get_game_number(16, 16) == 1
    assert get_game_number(3, 16) == 1
    assert get_game_number(4, 16) == 2

    wrapped = get_game_hole_range(1, 16)
    assert (wrapped.start_hole, wrapped.end_hole) == (16, 3)


def test_best_ball_wins_the_hole(foursome) -> None:
    players = foursome({"a": [4], "b": [5], "c": [5], "d": [6]})
    team1, team2 = get_teams_for_game(1, players)
    result = calculate_points(team1, team2, 1, scores_by_player(players))
    assert (result.team1, result.team2, result.winner) == (2, 0, "team1")

    one_point = calculate_points(
        team1, team2, 1, scores_by_player(players), use_2_points=False
    )
    assert (one_point.team1, one_point.team2) == (1, 0)


def test_tie_splits_only_in_two_point_mode(foursome) -> None:
    players = foursome({"a": [4], "b": [5], "c": [4], "d": [6]})
    team1, team2 = get_teams_for_game(1, players)
    scores = scores_by_player(players)

    split = calculate_points(team1, team2, 1, scores)
    assert (split.team1, split.team2, split.winner) == (1, 1, "tie")

    none = calculate_points(team1, team2, 1, scores, use_2_points=False)
    assert (none.team1, none.team2) == (0, 0)


def test_points_wait_for_all_four(foursome) -> None:
    players = foursome({"a": [4], "b": [5], "c": [4]})
    team1, team2 = get_teams_for_game(1, players)
    assert calculate_points(team1, team2, 1, scores_by_player(players)) is None


def test_team_with_every_member_dnf_loses(foursome) -> None:
    players = foursome(
        {"a": [7], "b": [8]},
        c={"dnf": [True]},
        d={"dnf": [True]},
    )
    team1, team2 = get_teams_for_game(1, players)
    result = calculate_points(team1, team2, 1, scores_by_player(players))
    assert result.winner == "team1"
    assert result.team2_score is None


def test_game_strokes_apply_within_their_game(foursome) -> None:
    strokes = StrokeHoles(sixes=SixesStrokeHoles(first_game=[1]))
    players = foursome({"a": [4], "b": [5], "c": [6], "d": [5]}, d={"stroke_holes": strokes})
    team1, team2 = get_teams_for_game(1, players)
    result = calculate_points(team1, team2, 1, scores_by_player(players))
    assert result.winner == "tie"
    assert result.team2_score == 4


def test_full_round_results_and_payout(foursome) -> None:
    players = foursome({"a": 4, "b": 5, "c": 5, "d": 5})
    games = calculate_sixes_results(players, scores_by_player(players), SixesSettings())

    assert [g.result for g in games] == [1, 1, 1]
    assert games[0].team1_points == 12
    assert games[0].holes == [1, 2, 3, 4, 5, 6]

    payout = calculate_sixes_payout(games, 5)
    assert payout == {"a": 15.0, "b": -5.0, "c": -5.0, "d": -5.0}
    assert sum(payout.values()) == 0


def test_half_stroke_on_par3_only_relieves_half(foursome, teebox) -> None:
    strokes = StrokeHoles(sixes=SixesStrokeHoles(first_game=[3]))
    cards = {"a": [4, 4, 4], "b": [5, 5, 5], "c": [5, 5, 4], "d": [5, 5, 6]}
    players = foursome(cards, c={"stroke_holes": strokes})
    team1, team2 = get_teams_for_game(1, players)
    scores = scores_by_player(players)

    half = calculate_points(
        team1, team2, 3, scores, teebox=teebox, half_stroke_on_par3=True
    )
    assert half.team2_score == 3.5
    assert half.winner == "team2"

    full = calculate_points(team1, team2, 3, scores, teebox=teebox)
    assert full.team2_score == 3
