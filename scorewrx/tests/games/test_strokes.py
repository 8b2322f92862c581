import pytest

from scorewrx.games.models import Group, StrokeHoles
from scorewrx.games.rules import GameRules
from scorewrx.games.settings import GameSettings, NinesSettings
from scorewrx.games.strokes import (
    allocate_stroke_holes,
    assign_group_stroke_holes,
    calculate_player_handicap,
    calculate_total_strokes,
    distribute_nassau_strokes,
    distribute_sixes_strokes,
    distribute_strokes,
    play_order,
    sixes_game_holes,
)


def test_custom_format_floors_handicap(make_player) -> None:
    player = make_player("a", handicap=10.7)
    assert calculate_player_handicap(player, "Custom") == 10
    assert calculate_player_handicap(player, "Standard") == pytest.approx(10.7)
    assert calculate_player_handicap(None) == 0


def test_total_strokes_differential_and_formats(make_player) -> None:
    high = make_player("a", handicap=12.4)
    low = make_player("b", handicap=5.6)
    players = [high, low]

    assert calculate_total_strokes(high, players, True, "Standard") == 6
    assert calculate_total_strokes(high, players, True, "Custom") == 7
    assert calculate_total_strokes(high, players, False, "Standard") == 12
    assert calculate_total_strokes(low, players, True) == 0


def test_total_strokes_are_capped(make_player) -> None:
    player = make_player("a", handicap=30)
    assert calculate_total_strokes(player, [player], False) == 18
    rules = GameRules(max_strokes=10)
    assert calculate_total_strokes(player, [player], False, rules=rules) == 10


def test_distribute_strokes_uses_lowest_ratings_in_play_order(teebox) -> None:
    assert distribute_strokes(3, teebox.holes) == [4, 9, 13]
    assert distribute_strokes(3, teebox.holes, starting_hole=10) == [13, 4, 9]
    assert distribute_strokes(0, teebox.holes) == []
    assert distribute_strokes(-2, teebox.holes) == []


def test_distribute_strokes_is_nested_and_unique(teebox) -> None:
    previous = set()
    for count in range(0, 19):
        holes = distribute_strokes(count, teebox.holes)
        assert len(holes) == len(set(holes)) == count
        assert previous <= set(holes)
        previous = set(holes)
    assert sorted(distribute_strokes(25, teebox.holes)) == list(range(1, 19))


def test_play_order_wraps_for_shotgun_starts() -> None:
    assert play_order(16)[:4] == [16, 17, 18, 1]
    games = sixes_game_holes(16)
    assert games[0] == [16, 17, 18, 1, 2, 3]
    assert games[1] == [4, 5, 6, 7, 8, 9]
    assert games[2] == [10, 11, 12, 13, 14, 15]


def test_sixes_remainder_goes_to_earliest_game(teebox) -> None:
    result = distribute_sixes_strokes(7, teebox.holes)
    assert result.first_game == [1, 4, 5]
    assert result.second_game == [9, 12]
    assert result.third_game == [13, 16]
    assert result.total == 7


def test_sixes_strokes_follow_starting_hole(teebox) -> None:
    result = distribute_sixes_strokes(3, teebox.holes, starting_hole=16)
    assert result.first_game == [16]
    assert result.second_game == [4]
    assert result.third_game == [13]


def test_nassau_strokes_split_by_half(teebox) -> None:
    result = distribute_nassau_strokes(4, teebox.holes)
    assert result["overall"] == [4, 9, 12, 13]
    assert result["front"] == [4, 9]
    assert result["back"] == [12, 13]


def test_allocate_only_enabled_formats(make_player, teebox) -> None:
    high = make_player("a", handicap=8)
    low = make_player("b", handicap=5)
    group = Group(id="g1", players=[high, low])
    settings = GameSettings(nines=NinesSettings(enabled=True))

    holes = allocate_stroke_holes(high, group, settings, teebox)
    assert holes.sixes is None
    assert holes.nassau is None
    assert holes.nines == [4, 9, 13]
    # Dots is enabled by default.
    assert holes.dots == [4, 9, 13]


def test_assign_keeps_existing_assignment(make_player, teebox) -> None:
    fixed = StrokeHoles(dots=[18])
    keeper = make_player("a", handicap=10, stroke_holes=fixed)
    fresh = make_player("b", handicap=2)
    group = Group(id="g1", players=[keeper, fresh])

    assigned = assign_group_stroke_holes(group, GameSettings(), teebox)
    by_id = {p.id: p for p in assigned.players}
    assert by_id["a"].stroke_holes == fixed
    assert by_id["b"].stroke_holes is not None
    assert by_id["b"].stroke_holes.dots == []
    assert group.players[1].stroke_holes is None


def test_sixes_split_sums_to_total_for_every_count(teebox) -> None:
    for count in range(19):
        result = distribute_sixes_strokes(count, teebox.holes)
        games = [result.first_game, result.second_game, result.third_game]
        assert result.total == count
        assert all(len(game) <= 6 for game in games)
        assert max(len(g) for g in games) - min(len(g) for g in games) <= 1
        assert len(games[0]) >= len(games[1]) >= len(games[2])
