"""Shared pytest fixtures for scorewrx tests."""

from __future__ import annotations

from typing import Callable, List, Optional

import pytest
from fastapi.testclient import TestClient

from scorewrx.app import app
from scorewrx.config import reset_settings_cache
from scorewrx.games.models import Course, Hole, Player, Teebox

# (number, par, handicap rating); par 72 with Par 3s on 3, 6, 11 and 15.
HOLE_LAYOUT = [
    (1, 4, 7),
    (2, 5, 11),
    (3, 3, 15),
    (4, 4, 1),
    (5, 4, 9),
    (6, 3, 17),
    (7, 5, 5),
    (8, 4, 13),
    (9, 4, 3),
    (10, 4, 8),
    (11, 3, 16),
    (12, 5, 4),
    (13, 4, 2),
    (14, 4, 12),
    (15, 3, 18),
    (16, 4, 6),
    (17, 5, 14),
    (18, 4, 10),
]


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def teebox() -> Teebox:
    return Teebox(
        name="White",
        holes=[Hole(number=n, par=par, handicap_rating=r) for n, par, r in HOLE_LAYOUT],
    )


@pytest.fixture
def course(teebox: Teebox) -> Course:
    return Course(id="c1", name="Pine Valley Muni", teeboxes=[teebox])


@pytest.fixture
def course_payload() -> dict:
    return {
        "id": "c1",
        "name": "Pine Valley Muni",
        "teeboxes": [
            {
                "name": "White",
                "holes": [
                    {"number": n, "par": par, "handicapRating": r}
                    for n, par, r in HOLE_LAYOUT
                ],
            }
        ],
    }


@pytest.fixture
def pars() -> List[int]:
    return [par for _, par, _ in HOLE_LAYOUT]


@pytest.fixture
def make_player() -> Callable[..., Player]:
    """Build a player; ``scores`` may be a full card or a single value for every hole."""

    def build(
        player_id: str,
        scores: Optional[object] = None,
        handicap: float = 0.0,
        **fields,
    ) -> Player:
        if isinstance(scores, int):
            scores = [scores] * 18
        return Player(
            id=player_id,
            name=player_id.upper(),
            score=scores or [],
            tournament_handicap=handicap,
            **fields,
        )

    return build


@pytest.fixture
def client() -> TestClient:
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
