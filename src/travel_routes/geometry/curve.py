"""Screen-space quadratic Bezier curves with zoom-stable bend."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from travel_routes.geometry.bridge import CoordinateBridge, GeoPoint, ScreenPoint


TANGENT_MODES = ("chord", "local")


@dataclass(frozen=True)
class CurveParams:
    """Bend and resolution of a route curve.

    Attributes:
        curvature_factor: Share of the on-screen segment length used as bend.
        min_px: Lower clamp of the bend in pixels.
        max_px: Upper clamp of the bend in pixels.
        segments: Number of polyline segments (``segments + 1`` samples).
        bend: +1 bends toward the left-hand normal ``(-dy, dx)``, -1 to the other side.
    """

    curvature_factor: float = 0.18
    min_px: float = 18.0
    max_px: float = 55.0
    segments: int = 90
    bend: int = 1

    def __post_init__(self) -> None:
        if self.segments < 1:
            raise ValueError(f"segments must be >= 1, got {self.segments}")
        if self.curvature_factor < 0:
            raise ValueError(f"curvature_factor must be >= 0, got {self.curvature_factor}")
        if not 0 <= self.min_px <= self.max_px:
            raise ValueError(f"need 0 <= min_px <= max_px, got {self.min_px} and {self.max_px}")
        if self.bend not in (1, -1):
            raise ValueError(f"bend must be +1 or -1, got {self.bend}")


@dataclass(frozen=True)
class CurveResult:
    polyline: Tuple[GeoPoint, ...]
    mid: GeoPoint
    angle_deg: float
    curvature_px: float
    control: ScreenPoint


def clamp_curvature(length_px: float, params: CurveParams) -> float:
    """Bend magnitude for a segment of ``length_px`` on screen."""
    return max(params.min_px, min(params.max_px, length_px * params.curvature_factor))


def left_normal(dx: float, dy: float) -> Tuple[float, float, float]:
    """Unit left-hand normal of (dx, dy) and the vector length.

    A zero vector has length 1 and the fixed normal (0, 1).
    """
    length = math.hypot(dx, dy)
    if length == 0:
        return 0.0, 1.0, 1.0
    return -dy / length, dx / length, length


def control_point(a: ScreenPoint, b: ScreenPoint, params: CurveParams) -> Tuple[ScreenPoint, float]:
    """Bezier control point above the midpoint of a→b and the bend used."""
    dx = b.x - a.x
    dy = b.y - a.y
    px, py, length = left_normal(dx, dy)
    curvature = clamp_curvature(length, params)
    mx = (a.x + b.x) / 2
    my = (a.y + b.y) / 2
    sign = params.bend
    return ScreenPoint(mx + sign * px * curvature, my + sign * py * curvature), curvature


def quadratic_bezier(a: ScreenPoint, c: ScreenPoint, b: ScreenPoint, t: np.ndarray) -> np.ndarray:
    """Evaluate ``(1-t)^2 a + 2(1-t)t c + t^2 b`` for each t; returns shape (n, 2)."""
    t = np.asarray(t, dtype=float)
    mt = 1.0 - t
    x = (mt * mt * a.x) + (2 * mt * t * c.x) + (t * t * b.x)
    y = (mt * mt * a.y) + (2 * mt * t * c.y) + (t * t * b.y)
    return np.column_stack([x, y])


def sample_curve(a: ScreenPoint, c: ScreenPoint, b: ScreenPoint, segments: int) -> np.ndarray:
    t = np.arange(segments + 1, dtype=float) / segments
    return quadratic_bezier(a, c, b, t)


def _marker_placement(
    a: ScreenPoint,
    c: ScreenPoint,
    b: ScreenPoint,
    samples: np.ndarray,
    tangent: str,
) -> Tuple[ScreenPoint, float, float]:
    """Return (anchor point, tangent dx, tangent dy) used to place the marker."""
    if tangent == "chord":
        mid = quadratic_bezier(a, c, b, np.array([0.5]))[0]
        return ScreenPoint(float(mid[0]), float(mid[1])), b.x - a.x, b.y - a.y
    # local: neighbours of the middle sample
    mid_i = len(samples) // 2
    prev = samples[max(0, mid_i - 1)]
    nxt = samples[min(len(samples) - 1, mid_i + 1)]
    mid = samples[mid_i]
    return ScreenPoint(float(mid[0]), float(mid[1])), float(nxt[0] - prev[0]), float(nxt[1] - prev[1])


def build_curve(
    bridge: CoordinateBridge,
    start: GeoPoint,
    end: GeoPoint,
    params: CurveParams,
    marker_offset_px: float = 0.0,
    tangent: str = "chord",
) -> CurveResult:
    """Build a curved polyline between two geographic points.

    The curve is laid out in screen space under the current camera, so its bend
    looks the same at every zoom, and then unprojected sample by sample.

    Args:
        bridge: Coordinate bridge for the current viewport.
        start: Trimmed start point.
        end: Trimmed end point.
        params: Bend and resolution.
        marker_offset_px: Signed distance of the marker from the curve, along
            the left-hand normal of the tangent.
        tangent: ``"chord"`` uses the straight line start→end for rotation and
            the analytic point at t=0.5; ``"local"`` uses the samples around the
            middle of the polyline.

    Returns:
        CurveResult with the geographic polyline, marker point and angle.
    """
    if tangent not in TANGENT_MODES:
        raise ValueError(f"Unknown tangent mode '{tangent}'. Valid: {TANGENT_MODES}")

    a = bridge.project(start)
    b = bridge.project(end)
    c, curvature = control_point(a, b, params)
    samples = sample_curve(a, c, b, params.segments)

    polyline: List[GeoPoint] = [bridge.unproject(ScreenPoint(float(x), float(y))) for x, y in samples]

    anchor, tdx, tdy = _marker_placement(a, c, b, samples, tangent)
    angle_deg = math.degrees(math.atan2(tdy, tdx))
    nx, ny, _ = left_normal(tdx, tdy)
    marker = ScreenPoint(anchor.x + nx * marker_offset_px, anchor.y + ny * marker_offset_px)

    return CurveResult(
        polyline=tuple(polyline),
        mid=bridge.unproject(marker),
        angle_deg=angle_deg,
        curvature_px=curvature,
        control=c,
    )
