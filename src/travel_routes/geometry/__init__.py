"""Screen-space route geometry: coordinate bridge, anchor trimming and curves."""

from travel_routes.geometry.bridge import CoordinateBridge, GeoPoint, ScreenPoint
from travel_routes.geometry.curve import CurveParams, CurveResult, build_curve, clamp_curvature
from travel_routes.geometry.trim import Anchor, trim

__all__ = [
    "Anchor",
    "CoordinateBridge",
    "CurveParams",
    "CurveResult",
    "GeoPoint",
    "ScreenPoint",
    "build_curve",
    "clamp_curvature",
    "trim",
]
