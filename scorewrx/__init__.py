"""ScoreWRX: handicap stroke allocation and side-game scoring for golf events."""

__version__ = "0.1.0"
