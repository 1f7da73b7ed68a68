"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .assignments import bp as assignments_bp  # noqa: E402
from .body_metrics import bp as body_metrics_bp  # noqa: E402
from .drafts import bp as drafts_bp  # noqa: E402
from .exercises import bp as exercises_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .routines import bp as routines_bp  # noqa: E402
from .workouts import bp as workouts_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1
    (exercises_bp, "/exercises"),
    (drafts_bp, "/routines/drafts"),
    (routines_bp, "/routines"),
    (workouts_bp, "/workouts"),
    (assignments_bp, "/assignments"),
    (body_metrics_bp, "/body-metrics"),
]
