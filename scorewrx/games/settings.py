"""Per-format game settings and the typed updates that modify them."""

from __future__ import annotations

import math
from typing import Annotated, Dict, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .models import HandicapFormat

MatchType = Literal["all", "frontback", "overall"]

DEFAULT_AMOUNT = 5.0
DEFAULT_DOTS_AMOUNT = 1.0
DEFAULT_NINES_AMOUNT = 0.5


class _Strict(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ManualPot(_Strict):
    enabled: bool = False
    amount: float = Field(default=0.0, ge=0)


class SixesSettings(_Strict):
    game: Literal["sixes"] = "sixes"
    enabled: bool = False
    amount_per_game: float = Field(default=DEFAULT_AMOUNT, alias="amountPerGame")
    use_differential_handicap: bool = Field(
        default=True, alias="useDifferentialHandicap"
    )
    distribute_strokes_evenly: bool = Field(
        default=True, alias="distributeStrokesEvenly"
    )
    use_2_points_per_game: bool = Field(default=True, alias="use2PointsPerGame")


class NinesSettings(_Strict):
    game: Literal["nines"] = "nines"
    enabled: bool = False
    amount_per_point: float = Field(
        default=DEFAULT_NINES_AMOUNT, alias="amountPerPoint"
    )
    use_differential_handicap: bool = Field(
        default=True, alias="useDifferentialHandicap"
    )


class NassauSettings(_Strict):
    game: Literal["nassau"] = "nassau"
    enabled: bool = False
    amount_per_game: float = Field(default=DEFAULT_AMOUNT, alias="amountPerGame")
    automatic_presses: bool = Field(default=False, alias="automaticPresses")
    match_type: MatchType = Field(default="all", alias="matchType")
    use_differential_handicap: bool = Field(
        default=True, alias="useDifferentialHandicap"
    )


class DotsSettings(_Strict):
    game: Literal["dots"] = "dots"
    enabled: bool = True
    amount_per_dot: float = Field(default=DEFAULT_DOTS_AMOUNT, alias="amountPerDot")
    use_differential_handicap: bool = Field(
        default=True, alias="useDifferentialHandicap"
    )
    track_greenies: bool = Field(default=True, alias="trackGreenies")
    track_sandies: bool = Field(default=True, alias="trackSandies")
    participants: List[str] = Field(default_factory=list)


class SkinsSettings(_Strict):
    game: Literal["skins"] = "skins"
    enabled: bool = False
    scratch_buy_in: float = Field(default=DEFAULT_AMOUNT, alias="scratchBuyIn")
    handicap_buy_in: float = Field(default=DEFAULT_AMOUNT, alias="handicapBuyIn")
    use_half_stroke_on_par3: bool = Field(default=False, alias="useHalfStrokeOnPar3")
    manual_scratch_pot: ManualPot = Field(
        default_factory=ManualPot, alias="manualScratchPot"
    )
    manual_handicap_pot: ManualPot = Field(
        default_factory=ManualPot, alias="manualHandicapPot"
    )


class GameSettings(_Strict):
    """Tournament-wide snapshot of every game's configuration."""

    handicap_format: HandicapFormat = Field(default="Standard", alias="handicapFormat")
    sixes: SixesSettings = Field(default_factory=SixesSettings)
    nines: NinesSettings = Field(default_factory=NinesSettings)
    nassau: NassauSettings = Field(default_factory=NassauSettings)
    dots: DotsSettings = Field(default_factory=DotsSettings)
    skins: SkinsSettings = Field(default_factory=SkinsSettings)


# Partial updates, one variant per format. Unset fields leave the current
# value in place; unknown fields fail validation.


class SixesUpdate(_Strict):
    game: Literal["sixes"]
    enabled: Optional[bool] = None
    amount_per_game: Optional[float] = Field(default=None, alias="amountPerGame")
    use_differential_handicap: Optional[bool] = Field(
        default=None, alias="useDifferentialHandicap"
    )
    distribute_strokes_evenly: Optional[bool] = Field(
        default=None, alias="distributeStrokesEvenly"
    )
    use_2_points_per_game: Optional[bool] = Field(
        default=None, alias="use2PointsPerGame"
    )


class NinesUpdate(_Strict):
    game: Literal["nines"]
    enabled: Optional[bool] = None
    amount_per_point: Optional[float] = Field(default=None, alias="amountPerPoint")
    use_differential_handicap: Optional[bool] = Field(
        default=None, alias="useDifferentialHandicap"
    )


class NassauUpdate(_Strict):
    game: Literal["nassau"]
    enabled: Optional[bool] = None
    amount_per_game: Optional[float] = Field(default=None, alias="amountPerGame")
    automatic_presses: Optional[bool] = Field(default=None, alias="automaticPresses")
    match_type: Optional[MatchType] = Field(default=None, alias="matchType")
    use_differential_handicap: Optional[bool] = Field(
        default=None, alias="useDifferentialHandicap"
    )


class DotsUpdate(_Strict):
    game: Literal["dots"]
    enabled: Optional[bool] = None
    amount_per_dot: Optional[float] = Field(default=None, alias="amountPerDot")
    use_differential_handicap: Optional[bool] = Field(
        default=None, alias="useDifferentialHandicap"
    )
    track_greenies: Optional[bool] = Field(default=None, alias="trackGreenies")
    track_sandies: Optional[bool] = Field(default=None, alias="trackSandies")
    participants: Optional[List[str]] = None


class SkinsUpdate(_Strict):
    game: Literal["skins"]
    enabled: Optional[bool] = None
    scratch_buy_in: Optional[float] = Field(default=None, alias="scratchBuyIn")
    handicap_buy_in: Optional[float] = Field(default=None, alias="handicapBuyIn")
    use_half_stroke_on_par3: Optional[bool] = Field(
        default=None, alias="useHalfStrokeOnPar3"
    )
    manual_scratch_pot: Optional[ManualPot] = Field(
        default=None, alias="manualScratchPot"
    )
    manual_handicap_pot: Optional[ManualPot] = Field(
        default=None, alias="manualHandicapPot"
    )


AnyUpdate = Union[SixesUpdate, NinesUpdate, NassauUpdate, DotsUpdate, SkinsUpdate]
SettingsUpdate = Annotated[AnyUpdate, Field(discriminator="game")]

_AMOUNT_FIELDS: Dict[str, FrozenSet[str]] = {
    "sixes": frozenset({"amount_per_game"}),
    "nines": frozenset({"amount_per_point"}),
    "nassau": frozenset({"amount_per_game"}),
    "dots": frozenset({"amount_per_dot"}),
    "skins": frozenset({"scratch_buy_in", "handicap_buy_in"}),
}


def _amount_ok(game: str, value: float) -> bool:
    if value is None or math.isnan(value):
        return False
    # Nassau allows a zero stake; the other games need a positive amount.
    if game == "nassau":
        return value >= 0
    return value > 0


def apply_settings_update(settings: GameSettings, update: AnyUpdate) -> GameSettings:
    """Return ``settings`` with ``update`` applied.

    Amount fields that are NaN or out of range are dropped silently; the
    rest of the update still applies.
    """

    game = update.game
    changes = {
        name: value
        for name, value in update.model_dump(exclude_unset=True, exclude={"game"}).items()
        if value is not None
    }
    for name in _AMOUNT_FIELDS[game] & changes.keys():
        if not _amount_ok(game, changes[name]):
            changes.pop(name)
    for pot in ("manual_scratch_pot", "manual_handicap_pot"):
        if pot in changes:
            changes[pot] = ManualPot.model_validate(changes[pot])

    current = getattr(settings, game)
    return settings.model_copy(update={game: current.model_copy(update=changes)})


__all__ = [
    "AnyUpdate",
    "DotsSettings",
    "DotsUpdate",
    "GameSettings",
    "ManualPot",
    "MatchType",
    "NassauSettings",
    "NassauUpdate",
    "NinesSettings",
    "NinesUpdate",
    "SettingsUpdate",
    "SixesSettings",
    "SixesUpdate",
    "SkinsSettings",
    "SkinsUpdate",
    "apply_settings_update",
]
