"""Telemetry helpers for game scoring."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

from scorewrx.metrics import REGISTRY

_score_histogram = Histogram(
    "scorewrx_score_latency_ms",
    "Latency of tournament scoring in milliseconds",
    labelnames=("operation",),
    registry=REGISTRY,
)

_games_counter = Counter(
    "scorewrx_games_scored_total",
    "Game results produced per format",
    labelnames=("game",),
    registry=REGISTRY,
)

_skipped_counter = Counter(
    "scorewrx_games_skipped_total",
    "Enabled games skipped because the group did not qualify",
    labelnames=("game", "reason"),
    registry=REGISTRY,
)


def record_scoring_metrics(
    *,
    operation: str,
    duration_ms: float,
    played: dict[str, int] | None = None,
    skipped: dict[tuple[str, str], int] | None = None,
) -> None:
    """Publish Prometheus metrics for one scoring call."""
    _score_histogram.labels(operation=operation).observe(duration_ms)
    for game, count in (played or {}).items():
        if count:
            _games_counter.labels(game=game).inc(count)
    for (game, reason), count in (skipped or {}).items():
        if count:
            _skipped_counter.labels(game=game, reason=reason).inc(count)


__all__ = ["record_scoring_metrics"]
