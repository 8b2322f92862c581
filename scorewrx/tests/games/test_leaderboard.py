from scorewrx.games.leaderboard import (
    adjusted_score_card,
    back_nine_net,
    build_leaderboard,
    last_six_net,
)


def test_back_nine_breaks_net_tie(make_player, teebox) -> None:
    strong_finish = make_player("a", [5] * 9 + [4] * 9)
    strong_start = make_player("b", [4] * 9 + [5] * 9)

    board = build_leaderboard([strong_start, strong_finish], teebox)
    assert [e.player_id for e in board] == ["a", "b"]
    assert [e.position for e in board] == [1, 2]
    assert board[0].net_score == board[1].net_score == 81
    assert board[0].back_nine_net == 0
    assert board[1].back_nine_net == 9
    assert board[0].relative_to_par == 9


def test_window_nets_use_handicap_fractions(make_player, teebox) -> None:
    player = make_player("a", 4, handicap=9)
    assert back_nine_net(player, teebox) == -4
    assert last_six_net(player, teebox) == -3


def test_unplayed_window_loses_tiebreak(make_player, teebox) -> None:
    front_only = make_player("a", [4] * 9)
    assert back_nine_net(front_only, teebox) == 999
    assert last_six_net(front_only, teebox) == 999

    entry = build_leaderboard([front_only], teebox)[0]
    assert entry.holes_played == 9
    assert entry.gross_score == 36


def test_players_without_scores_are_left_off(make_player, teebox) -> None:
    board = build_leaderboard([make_player("a"), make_player("b", 4)], teebox)
    assert [e.player_id for e in board] == ["b"]


def test_adjusted_score_card_caps_blowups(make_player, teebox) -> None:
    card = [4] * 18
    card[0] = 10
    scratch = adjusted_score_card(make_player("a", card), teebox)
    assert scratch.holes[0] == 6
    assert scratch.out == 6 + 4 * 8
    assert scratch.in_ == 36
    assert scratch.total == scratch.out + scratch.in_
    assert scratch.model_dump(by_alias=True)["in"] == 36

    card[3] = 9
    stroked = adjusted_score_card(make_player("b", card, handicap=10), teebox)
    assert stroked.holes[3] == 7
