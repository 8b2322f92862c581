"""Explicit rule values threaded through the game engines."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GameRules(BaseModel):
    """Numeric limits shared by the engines.

    Engines accept a ``rules`` keyword so tests (and alternative formats) can
    vary them without touching module globals.
    """

    model_config = ConfigDict(frozen=True)

    max_strokes: int = Field(default=18, ge=0, le=18)
    holes_per_round: int = 18
    holes_per_game: int = 6
    games_per_round: int = 3
    front_nine: Tuple[int, int] = (1, 9)
    back_nine: Tuple[int, int] = (10, 18)
    last_six: Tuple[int, int] = (13, 18)
    min_players_sixes: int = 4
    min_players_nines: int = 3
    players_nassau: int = 2
    nines_points: Tuple[int, ...] = (5, 3, 1)
    nines_dnf_points: int = 1
    missing_window_sentinel: int = 999

    @model_validator(mode="after")
    def _strokes_fit_round(self) -> "GameRules":
        if self.max_strokes > self.holes_per_round:
            raise ValueError("max_strokes cannot exceed holes_per_round")
        return self


DEFAULT_RULES = GameRules()


__all__ = ["GameRules", "DEFAULT_RULES"]
