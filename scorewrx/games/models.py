"""Pydantic models for courses, players and groups used by the game engines."""

from __future__ import annotations

from typing import Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

HOLES_PER_ROUND = 18

HandicapFormat = Literal["Custom", "Standard"]
SkinsPool = Literal["None", "Scratch", "Handicap", "Both"]
Cart = Literal["1", "2"]
CartPosition = Literal["driver", "rider"]


def _pad(values: Optional[list], fill, name: str) -> list:
    items = list(values or [])
    if len(items) > HOLES_PER_ROUND:
        raise ValueError(f"{name} must hold at most {HOLES_PER_ROUND} entries")
    return items + [fill] * (HOLES_PER_ROUND - len(items))


class Hole(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    number: int = Field(ge=1, le=HOLES_PER_ROUND)
    par: Literal[3, 4, 5]
    handicap_rating: int = Field(ge=1, le=HOLES_PER_ROUND, alias="handicapRating")
    yardage: Optional[int] = None


class Teebox(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = "Default"
    rating: Optional[float] = None
    slope: Optional[float] = None
    holes: List[Hole]

    @field_validator("holes")
    @classmethod
    def _check_holes(cls, holes: List[Hole]) -> List[Hole]:
        if len(holes) != HOLES_PER_ROUND:
            raise ValueError(f"a teebox needs exactly {HOLES_PER_ROUND} holes")
        numbers = sorted(h.number for h in holes)
        if numbers != list(range(1, HOLES_PER_ROUND + 1)):
            raise ValueError("hole numbers must cover 1..18 once each")
        ratings = sorted(h.handicap_rating for h in holes)
        if ratings != list(range(1, HOLES_PER_ROUND + 1)):
            raise ValueError("handicap ratings must be a permutation of 1..18")
        return sorted(holes, key=lambda h: h.number)

    @property
    def par(self) -> int:
        return sum(h.par for h in self.holes)

    def hole(self, number: int) -> Hole:
        return self.holes[number - 1]

    def holes_in(self, numbers: Iterable[int]) -> List[Hole]:
        return [self.hole(n) for n in numbers]

    def par_for(self, numbers: Iterable[int]) -> int:
        return sum(h.par for h in self.holes_in(numbers))


class Course(BaseModel):
    id: str
    name: str
    teeboxes: List[Teebox] = Field(min_length=1)

    @property
    def primary_teebox(self) -> Teebox:
        return self.teeboxes[0]


class SixesStrokeHoles(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    first_game: List[int] = Field(default_factory=list, alias="firstGame")
    second_game: List[int] = Field(default_factory=list, alias="secondGame")
    third_game: List[int] = Field(default_factory=list, alias="thirdGame")

    def for_game(self, game: int) -> List[int]:
        return [self.first_game, self.second_game, self.third_game][game - 1]

    @property
    def total(self) -> int:
        return len(self.first_game) + len(self.second_game) + len(self.third_game)


class StrokeHoles(BaseModel):
    """Per-format stroke-hole assignment, frozen once computed."""

    model_config = ConfigDict(frozen=True)

    sixes: Optional[SixesStrokeHoles] = None
    nines: Optional[List[int]] = None
    dots: Optional[List[int]] = None
    nassau: Optional[List[int]] = None


class ScoreCard(BaseModel):
    """Gross scores and DNF flags for one player, index 0 = hole 1."""

    score: List[Optional[int]] = Field(default_factory=list, validate_default=True)
    dnf: List[bool] = Field(default_factory=list, validate_default=True)

    @field_validator("score", mode="before")
    @classmethod
    def _pad_score(cls, value):
        return _pad(value, None, "score")

    @field_validator("dnf", mode="before")
    @classmethod
    def _pad_dnf(cls, value):
        return _pad(value, False, "dnf")

    def is_dnf(self, hole: int) -> bool:
        return bool(self.dnf[hole - 1])

    def has_score(self, hole: int) -> bool:
        return self.score[hole - 1] is not None

    def is_reported(self, hole: int) -> bool:
        """True once the hole has either a score or a DNF mark."""

        return self.is_dnf(hole) or self.has_score(hole)

    def hole_score(self, hole: int) -> Optional[int]:
        if self.is_dnf(hole):
            return None
        return self.score[hole - 1]


class Player(ScoreCard):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    short_name: Optional[str] = Field(default=None, alias="shortName")
    tournament_handicap: float = Field(default=0.0, ge=0, alias="tournamentHandicap")
    cart: Optional[Cart] = None
    position: Optional[CartPosition] = None
    dots: List[int] = Field(default_factory=list, validate_default=True)
    greenies: List[int] = Field(default_factory=list)
    sandies: List[int] = Field(default_factory=list)
    skins_pool: SkinsPool = Field(default="None", alias="skinsPool")
    stroke_holes: Optional[StrokeHoles] = Field(default=None, alias="strokeHoles")

    @field_validator("dots", mode="before")
    @classmethod
    def _pad_dots(cls, value):
        return _pad(value, 0, "dots")

    @property
    def display_name(self) -> str:
        return self.short_name or self.name or self.id

    @property
    def card(self) -> ScoreCard:
        return ScoreCard(score=list(self.score), dnf=list(self.dnf))


class Group(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    number: int = 1
    starting_tee: int = Field(default=1, ge=1, le=HOLES_PER_ROUND, alias="startingTee")
    tee_time: Optional[str] = Field(default=None, alias="teeTime")
    players: List[Player] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_players(self) -> "Group":
        ids = [p.id for p in self.players]
        if len(set(ids)) != len(ids):
            raise ValueError("player ids must be unique within a group")
        return self


ScoresByPlayer = Dict[str, ScoreCard]


def scores_by_player(players: Iterable[Player]) -> ScoresByPlayer:
    """Snapshot each player's card keyed by id."""

    return {p.id: p.card for p in players}


def with_updates(player: Player, **changes) -> Player:
    """Copy ``player`` with ``changes`` applied, keeping stroke holes as assigned."""

    changes.pop("stroke_holes", None)
    changes.pop("strokeHoles", None)
    data = {**player.model_dump(exclude={"stroke_holes"}), **changes}
    data["stroke_holes"] = player.stroke_holes
    return type(player).model_validate(data)


__all__ = [
    "HOLES_PER_ROUND",
    "Cart",
    "CartPosition",
    "Course",
    "Group",
    "HandicapFormat",
    "Hole",
    "Player",
    "ScoreCard",
    "ScoresByPlayer",
    "SixesStrokeHoles",
    "SkinsPool",
    "StrokeHoles",
    "Teebox",
    "scores_by_player",
    "with_updates",
]
