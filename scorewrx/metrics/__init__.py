"""Prometheus registry and HTTP instrumentation for the scoring service."""

from __future__ import annotations

import os
import time
from typing import Any, Awaitable, Callable, FrozenSet

from fastapi import Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

BUILD_VERSION = os.getenv("BUILD_VERSION", "dev")
GIT_SHA = os.getenv("GIT_SHA", "unknown")

UNTRACKED_PATHS: FrozenSet[str] = frozenset({"/metrics", "/health"})
UNMATCHED_ROUTE = "unmatched"

REGISTRY = CollectorRegistry()
REQUESTS = Counter(
    "scorewrx_http_requests",
    "HTTP requests by route template",
    ["route", "method", "status"],
    registry=REGISTRY,
)
LATENCY = Histogram(
    "scorewrx_http_request_latency_seconds",
    "Request latency (seconds)",
    ["route", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=REGISTRY,
)
BUILD_INFO = Gauge(
    "scorewrx_build_info",
    "Build version and git sha of the running service",
    ["version", "git"],
    registry=REGISTRY,
)
BUILD_INFO.labels(version=BUILD_VERSION, git=GIT_SHA).set(1)


async def metrics_app(_req: Request | None = None) -> Response:
    data = generate_latest(REGISTRY)
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


def route_label(scope: dict[str, Any]) -> str:
    """Route template for the request, e.g. ``/api/games/score``.

    Paths that matched no route share one label so stray URLs cannot grow
    the series count.
    """

    route = scope.get("route")
    template = getattr(route, "path", None)
    return template or UNMATCHED_ROUTE


class MetricsMiddleware:
    def __init__(
        self,
        app: Callable[..., Awaitable[Any]],
        untracked: FrozenSet[str] = UNTRACKED_PATHS,
    ):
        self.app = app
        self.untracked = untracked

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[..., Awaitable[Any]],
        send: Callable[..., Awaitable[Any]],
    ) -> None:
        if scope.get("type") != "http" or scope.get("path") in self.untracked:
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        start = time.perf_counter()
        status_code = 500

        async def _send(message: dict[str, Any]) -> None:
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = message.get("status", 200)
            await send(message)

        try:
            await self.app(scope, receive, _send)
        finally:
            # Routing fills scope["route"] in place while the app runs.
            route = route_label(scope)
            LATENCY.labels(route=route, method=method).observe(
                time.perf_counter() - start
            )
            REQUESTS.labels(route=route, method=method, status=str(status_code)).inc()


__all__ = [
    "BUILD_INFO",
    "BUILD_VERSION",
    "GIT_SHA",
    "LATENCY",
    "REGISTRY",
    "REQUESTS",
    "UNTRACKED_PATHS",
    "MetricsMiddleware",
    "metrics_app",
    "route_label",
]
