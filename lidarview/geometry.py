"""Planar geometry, height zones and colour ramps used by the point-cloud view."""

from __future__ import annotations

import math
from typing import Sequence

Vec2 = tuple[float, float]
Color = tuple[float, float, float]
Segment = tuple[Vec2, Vec2]

TWO_PI = math.tau

ZONE_LABELS: tuple[str, ...] = (
    "z < -1.75 m",
    "-1.75 m <= z < -1.50 m",
    "-1.50 m <= z < -1.25 m",
    "-1.25 m <= z < -1.00 m",
    "-1.00 m <= z < -0.75 m",
    "-0.75 m <= z < -0.50 m",
    "-0.50 m <= z < 0.00 m",
    "0.00 m <= z < 0.50 m",
    "0.50 m <= z < 0.75 m",
    "0.75 m <= z < 1.00 m",
    "1.00 m <= z < 1.25 m",
    "1.25 m <= z < 1.50 m",
    "1.50 m <= z < 1.75 m",
    "z >= 1.75 m",
)

ZONE_COLORS: tuple[Color, ...] = (
    (0.05, 0.25, 0.85),
    (0.1, 0.35, 0.85),
    (0.15, 0.45, 0.8),
    (0.2, 0.55, 0.7),
    (0.25, 0.65, 0.6),
    (0.3, 0.75, 0.45),
    (0.3, 0.85, 0.3),
    (0.6, 0.9, 0.2),
    (0.8, 0.85, 0.15),
    (0.9, 0.7, 0.1),
    (0.95, 0.55, 0.05),
    (1.0, 0.35, 0.0),
    (1.0, 0.15, 0.05),
    (0.85, 0.0, 0.15),
)

ZONE_THRESHOLDS: tuple[float, ...] = (
    -1.75, -1.50, -1.25, -1.00, -0.75, -0.50, 0.00, 0.50, 0.75, 1.00, 1.25, 1.50, 1.75,
)

HEIGHT_COLOR_COOL: Color = (0.1, 0.2, 0.9)
HEIGHT_COLOR_WARM: Color = (0.9, 0.3, 0.0)
INTENSITY_COLOR_COOL: Color = (0.1, 0.9, 0.35)
INTENSITY_COLOR_WARM: Color = (0.9, 0.3, 0.0)

ROTATION_EPSILON_DEG = 1e-3
MIN_GRID_SPACING = 0.01


def distance_to_segment(a: Vec2, b: Vec2, point: Vec2) -> float:
    """Distance from ``point`` to the segment ``a``-``b``."""
    abx, aby = b[0] - a[0], b[1] - a[1]
    ab_squared = abx * abx + aby * aby
    if ab_squared < 1e-6:
        return math.dist(point, a)
    t = ((point[0] - a[0]) * abx + (point[1] - a[1]) * aby) / ab_squared
    t = min(max(t, 0.0), 1.0)
    return math.dist(point, (a[0] + abx * t, a[1] + aby * t))


def distance_to_contour(contour: Sequence[Vec2], point: Vec2) -> float:
    """Distance from ``point`` to the closed polygon ``contour``; ``inf`` if it has fewer than two points."""
    if len(contour) < 2:
        return math.inf
    edges = zip(contour, [*contour[1:], contour[0]])
    return min(distance_to_segment(start, end, point) for start, end in edges)


def direction_from_angle(angle: float) -> Vec2:
    """Unit vector pointing at ``angle`` radians."""
    return (math.cos(angle), math.sin(angle))


def rotate_point(point: Vec2, degrees: float) -> Vec2:
    """Rotate ``point`` about the origin; negligible rotations leave it untouched."""
    if abs(degrees) <= ROTATION_EPSILON_DEG:
        return point
    radians = math.radians(degrees)
    cos_v, sin_v = math.cos(radians), math.sin(radians)
    x, y = point
    return (cos_v * x - sin_v * y, sin_v * x + cos_v * y)


def zone_index_from_height(height: float) -> int:
    """Index of the altitude zone that ``height`` falls into."""
    return next(
        (index for index, threshold in enumerate(ZONE_THRESHOLDS) if height < threshold),
        len(ZONE_COLORS) - 1,
    )


def _mix(cool: Color, warm: Color, normalized: float) -> Color:
    t = min(max(normalized, 0.0), 1.0)
    return tuple(c + (w - c) * t for c, w in zip(cool, warm))  # type: ignore[return-value]


def sample_height_color(normalized: float) -> Color:
    """Colour of the height ramp at ``normalized`` (clamped to [0, 1])."""
    return _mix(HEIGHT_COLOR_COOL, HEIGHT_COLOR_WARM, normalized)


def sample_intensity_color(normalized: float) -> Color:
    """Colour of the intensity ramp at ``normalized`` (clamped to [0, 1])."""
    return _mix(INTENSITY_COLOR_COOL, INTENSITY_COLOR_WARM, normalized)


def snapshot_mid_angle(lower: float, upper: float, wrap_around: bool) -> float:
    """Angle halfway through a sector, handling sectors that wrap past 2*pi."""
    if wrap_around and upper < lower:
        upper += TWO_PI
    mid = 0.5 * (lower + upper)
    if mid >= TWO_PI:
        mid -= TWO_PI
    return mid


def grid_lines(grid_min: Vec2, grid_max: Vec2, spacing: float) -> list[Segment]:
    """Segments of a ground grid covering the bounds: vertical lines first, then horizontal."""
    step = max(MIN_GRID_SPACING, spacing)
    start_x = math.floor(grid_min[0] / step) * step
    end_x = math.ceil(grid_max[0] / step) * step
    start_y = math.floor(grid_min[1] / step) * step
    end_y = math.ceil(grid_max[1] / step) * step

    def ticks(start: float, end: float) -> list[float]:
        count = round((end - start) / step)
        return [start + i * step for i in range(count + 1)]

    vertical = [((x, start_y), (x, end_y)) for x in ticks(start_x, end_x)]
    horizontal = [((start_x, y), (end_x, y)) for y in ticks(start_y, end_y)]
    return vertical + horizontal