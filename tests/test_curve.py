from __future__ import annotations

import math

import numpy as np
import pytest

from travel_routes.geometry.bridge import CoordinateBridge, GeoPoint, ScreenPoint
from travel_routes.geometry.curve import (
    CurveParams,
    build_curve,
    clamp_curvature,
    control_point,
    quadratic_bezier,
)


class _PlaneMap:
    def project(self, lon, lat):
        return lon, lat

    def unproject(self, x, y):
        return x, y


def _bridge() -> CoordinateBridge:
    return CoordinateBridge(_PlaneMap())


SCENARIO = CurveParams(curvature_factor=0.2, min_px=10.0, max_px=50.0, segments=4)


def test_scenario_control_point_and_endpoints() -> None:
    result = build_curve(_bridge(), GeoPoint(10.0, 0.0), GeoPoint(90.0, 0.0), SCENARIO)

    assert result.curvature_px == pytest.approx(16.0)
    assert result.control == ScreenPoint(50.0, pytest.approx(16.0))
    assert len(result.polyline) == 5
    assert result.polyline[0] == GeoPoint(10.0, 0.0)
    assert result.polyline[-1] == GeoPoint(90.0, 0.0)


def test_negative_bend_flips_control_point() -> None:
    params = CurveParams(curvature_factor=0.2, min_px=10.0, max_px=50.0, segments=4, bend=-1)
    result = build_curve(_bridge(), GeoPoint(10.0, 0.0), GeoPoint(90.0, 0.0), params)
    assert result.control.x == pytest.approx(50.0)
    assert result.control.y == pytest.approx(-16.0)


@pytest.mark.parametrize("length", [0.0, 0.5, 10.0, 80.0, 250.0, 1000.0, 1e6])
def test_curvature_is_clamped(length) -> None:
    params = CurveParams(curvature_factor=0.18, min_px=18.0, max_px=55.0, segments=8)
    a = ScreenPoint(0.0, 0.0)
    b = ScreenPoint(length, 0.0)
    c, curvature = control_point(a, b, params)
    assert params.min_px <= curvature <= params.max_px
    offset = math.hypot(c.x - (a.x + b.x) / 2, c.y - (a.y + b.y) / 2)
    assert offset == pytest.approx(curvature)


def test_clamp_bounds() -> None:
    params = CurveParams(curvature_factor=0.5, min_px=5.0, max_px=20.0, segments=2)
    assert clamp_curvature(2.0, params) == 5.0
    assert clamp_curvature(30.0, params) == 15.0
    assert clamp_curvature(400.0, params) == 20.0


def test_bezier_hits_endpoints_exactly() -> None:
    a, c, b = ScreenPoint(3.3, -7.1), ScreenPoint(51.7, 12.9), ScreenPoint(88.8, 0.4)
    pts = quadratic_bezier(a, c, b, np.array([0.0, 1.0]))
    assert tuple(pts[0]) == (a.x, a.y)
    assert tuple(pts[1]) == (b.x, b.y)


def test_chord_angle_and_marker_offset() -> None:
    result = build_curve(
        _bridge(), GeoPoint(10.0, 0.0), GeoPoint(90.0, 0.0), SCENARIO, marker_offset_px=5.0
    )
    assert result.angle_deg == pytest.approx(0.0)
    # Analytic midpoint (50, 8) pushed 5px along the left-hand normal.
    assert result.mid.lon == pytest.approx(50.0)
    assert result.mid.lat == pytest.approx(13.0)


def test_vertical_chord_angle() -> None:
    result = build_curve(_bridge(), GeoPoint(0.0, 0.0), GeoPoint(0.0, 100.0), SCENARIO)
    assert result.angle_deg == pytest.approx(90.0)


def test_local_tangent_uses_middle_samples() -> None:
    result = build_curve(
        _bridge(),
        GeoPoint(10.0, 0.0),
        GeoPoint(90.0, 0.0),
        SCENARIO,
        marker_offset_px=-4.0,
        tangent="local",
    )
    # Samples 1 and 3 are (30, 6) and (70, 6): the tangent is horizontal.
    assert result.angle_deg == pytest.approx(0.0)
    assert result.mid.lon == pytest.approx(50.0)
    assert result.mid.lat == pytest.approx(4.0)


def test_coincident_points_give_finite_curve() -> None:
    result = build_curve(_bridge(), GeoPoint(1.0, 1.0), GeoPoint(1.0, 1.0), SCENARIO)
    assert math.isfinite(result.angle_deg)
    assert all(math.isfinite(v) for p in result.polyline for v in p)


def test_unknown_tangent_mode_rejected() -> None:
    with pytest.raises(ValueError):
        build_curve(_bridge(), GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0), SCENARIO, tangent="spline")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"segments": 0},
        {"curvature_factor": -0.1},
        {"min_px": 60.0, "max_px": 50.0},
        {"bend": 0},
    ],
)
def test_invalid_params(kwargs) -> None:
    with pytest.raises(ValueError):
        CurveParams(**kwargs)


@pytest.mark.parametrize("bend", [1, -1])
def test_zero_length_chord_bends_along_fixed_normal(bend) -> None:
    params = CurveParams(curvature_factor=0.18, min_px=18.0, max_px=55.0, segments=4, bend=bend)
    c, curvature = control_point(ScreenPoint(7.0, 3.0), ScreenPoint(7.0, 3.0), params)
    assert curvature == 18.0
    assert c == ScreenPoint(7.0, 3.0 + bend * 18.0)
