from __future__ import annotations

import logging
import time
from collections import Counter
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from scorewrx.api.security import require_api_key
from scorewrx.config import MAX_GROUPS_PER_REQUEST, get_game_rules, get_settings
from scorewrx.games.dots import DotsValidation, validate_dots_entry
from scorewrx.games.leaderboard import AdjustedScoreCard, adjusted_score_card
from scorewrx.games.models import Course, Group, Player, StrokeHoles
from scorewrx.games.service import TournamentResults, TournamentSnapshot, score_tournament
from scorewrx.games.settings import GameSettings, SettingsUpdate, apply_settings_update
from scorewrx.games.strokes import assign_group_stroke_holes
from scorewrx.games.telemetry import record_scoring_metrics

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/games",
    tags=["games"],
    dependencies=[Depends(require_api_key)],
)


def _default_game_settings() -> GameSettings:
    return GameSettings(handicap_format=get_settings().default_handicap_format)


class StrokesIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course: Course
    group: Group
    settings: GameSettings = Field(default_factory=_default_game_settings)
    teebox: Optional[str] = None


class StrokesOut(BaseModel):
    group_id: str
    players: Dict[str, StrokeHoles]


class SettingsIn(BaseModel):
    settings: GameSettings = Field(default_factory=_default_game_settings)
    update: SettingsUpdate


class DotsEntryIn(BaseModel):
    score: Optional[int] = None
    par: int = Field(ge=3, le=5)
    greenie: bool = False
    sandy: bool = False


class ScoreCardIn(BaseModel):
    course: Course
    player: Player


def _teebox(course: Course, name: Optional[str]):
    if name is None:
        return course.primary_teebox
    for teebox in course.teeboxes:
        if teebox.name == name:
            return teebox
    raise HTTPException(status_code=404, detail="teebox_not_found")


@router.post("/strokes", response_model=StrokesOut)
def allocate_strokes(payload: StrokesIn) -> StrokesOut:
    if not payload.group.players:
        raise HTTPException(status_code=400, detail="no_players")
    teebox = _teebox(payload.course, payload.teebox)
    group = assign_group_stroke_holes(
        payload.group, payload.settings, teebox, rules=get_game_rules()
    )
    return StrokesOut(
        group_id=group.id,
        players={p.id: p.stroke_holes for p in group.players if p.stroke_holes},
    )


@router.post("/score", response_model=TournamentResults)
def score(payload: TournamentSnapshot) -> TournamentResults:
    if not payload.groups:
        raise HTTPException(status_code=400, detail="no_groups")
    if len(payload.groups) > MAX_GROUPS_PER_REQUEST:
        raise HTTPException(status_code=400, detail="too_many_groups")
    if "settings" not in payload.model_fields_set:
        payload = payload.model_copy(update={"settings": _default_game_settings()})

    start = time.perf_counter()
    results = score_tournament(payload, rules=get_game_rules())
    duration_ms = (time.perf_counter() - start) * 1000.0

    played = {
        game: sum(1 for g in results.groups if getattr(g, game) is not None)
        for game in ("nassau", "nines", "sixes", "dots")
    }
    played["skins"] = 1 if results.skins is not None else 0
    skipped = Counter(
        (game, reason) for group in results.groups for game, reason in group.skipped.items()
    )
    record_scoring_metrics(
        operation="score",
        duration_ms=duration_ms,
        played=played,
        skipped=skipped,
    )
    logger.info("scored %d groups in %.1f ms", len(results.groups), duration_ms)
    return results


@router.post("/settings", response_model=GameSettings)
def update_settings(payload: SettingsIn) -> GameSettings:
    return apply_settings_update(payload.settings, payload.update)


@router.post("/dots/validate", response_model=DotsValidation)
def validate_dots(payload: DotsEntryIn) -> DotsValidation:
    return validate_dots_entry(payload.score, payload.par, payload.greenie, payload.sandy)


@router.post("/scorecard", response_model=AdjustedScoreCard)
def scorecard(payload: ScoreCardIn) -> AdjustedScoreCard:
    return adjusted_score_card(
        payload.player, payload.course.primary_teebox, rules=get_game_rules()
    )


__all__ = ["router"]
