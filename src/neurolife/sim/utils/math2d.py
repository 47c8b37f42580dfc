from __future__ import annotations

import math

from pygame.math import Vector2


def _wrap(value: float, size: float) -> float:
    wrapped = value % size
    # -1e-17 % 800.0 rounds up to 800.0
    if wrapped >= size:
        return 0.0
    return wrapped


def _wrap_position(position: Vector2, width: float, height: float) -> None:
    position.x = _wrap(position.x, width)
    position.y = _wrap(position.y, height)


def _bearing(origin: Vector2, target: Vector2, heading: float) -> float:
    return math.atan2(target.y - origin.y, target.x - origin.x) - heading


def _normalized_distance(distance: float, sensor_range: float) -> float:
    if not math.isfinite(sensor_range) or sensor_range <= 0.0:
        return 1.0
    return distance / sensor_range


def _finite_or(value: float, fallback: float) -> float:
    if not math.isfinite(value):
        return fallback
    return value
