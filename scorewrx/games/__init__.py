"""Side-game engines: strokes, dots, nassau, nines, sixes, skins, leaderboard."""

from .leaderboard import build_leaderboard  # noqa: F401
from .models import Course, Group, Hole, Player, ScoreCard, Teebox  # noqa: F401
from .rules import DEFAULT_RULES, GameRules  # noqa: F401
from .service import score_group, score_tournament, TournamentSnapshot  # noqa: F401
from .settings import GameSettings, apply_settings_update  # noqa: F401
from .strokes import assign_group_stroke_holes, distribute_strokes  # noqa: F401
