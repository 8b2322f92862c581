import pytest
from pydantic import ValidationError

from scorewrx.games.models import (
    Group,
    Hole,
    Player,
    ScoreCard,
    StrokeHoles,
    Teebox,
    with_updates,
)


def test_teebox_rejects_duplicate_ratings(teebox) -> None:
    holes = [h.model_copy() for h in teebox.holes]
    holes[1] = Hole(number=2, par=5, handicap_rating=7)
    with pytest.raises(ValidationError):
        Teebox(holes=holes)


def test_teebox_needs_eighteen_holes(teebox) -> None:
    with pytest.raises(ValidationError):
        Teebox(holes=teebox.holes[:9])


def test_teebox_sorts_holes_and_sums_par(teebox) -> None:
    shuffled = Teebox(holes=list(reversed(teebox.holes)))
    assert [h.number for h in shuffled.holes] == list(range(1, 19))
    assert shuffled.par == 72
    assert shuffled.par_for(range(10, 19)) == 36


def test_score_card_pads_to_eighteen_holes() -> None:
    card = ScoreCard(score=[4, 5])
    assert len(card.score) == 18
    assert len(card.dnf) == 18
    assert card.hole_score(2) == 5
    assert card.hole_score(3) is None
    assert not card.is_reported(3)

    with pytest.raises(ValidationError):
        ScoreCard(score=[4] * 19)


def test_dnf_hides_score_but_counts_as_reported() -> None:
    card = ScoreCard(score=[6], dnf=[True])
    assert card.hole_score(1) is None
    assert card.is_reported(1)


def test_player_accepts_camel_case_payload() -> None:
    player = Player.model_validate(
        {"id": "p1", "name": "Sam Lee", "shortName": "Sam", "tournamentHandicap": 7.5}
    )
    assert player.display_name == "Sam"
    assert player.tournament_handicap == 7.5

    with pytest.raises(ValidationError):
        Player(id="p2", tournament_handicap=-1)


def test_group_rejects_duplicate_players() -> None:
    with pytest.raises(ValidationError):
        Group(id="g1", players=[Player(id="a"), Player(id="a")])


def test_with_updates_keeps_stroke_holes(make_player) -> None:
    player = make_player("a", [4], stroke_holes=StrokeHoles(dots=[4]))
    updated = with_updates(player, dots=[1, 1], stroke_holes=None)
    assert updated.dots[:3] == [1, 1, 0]
    assert updated.stroke_holes == player.stroke_holes
    assert player.dots[0] == 0
