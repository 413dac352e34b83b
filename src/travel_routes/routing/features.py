"""Turn one route definition into its line and marker features."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from shapely.geometry import LineString, Point, mapping

from travel_routes.geometry.bridge import CoordinateBridge
from travel_routes.geometry.curve import TANGENT_MODES, CurveParams, build_curve
from travel_routes.geometry.trim import Anchor, trim


Feature = Dict[str, Any]
FeatureCollection = Dict[str, Any]

KIND_LINE = "line"
KIND_MARKER = "marker"


@dataclass(frozen=True)
class RouteDefinition:
    """Declarative description of one route, fixed for the session.

    ``marker_side`` picks which side of the curve the marker sits on and
    ``curve.bend`` which way the curve bows; both are per route.
    """
    route_id: str
    from_anchor: Anchor
    to_anchor: Anchor
    curve: CurveParams = field(default_factory=CurveParams)
    marker_side: int = 1
    marker_offset_px: float = 0.0
    marker_kind: str = "car"
    mode: str = "drive"
    tangent: str = "chord"

    def __post_init__(self) -> None:
        if not self.route_id:
            raise ValueError("route_id must be a non-empty string")
        if self.marker_side not in (1, -1):
            raise ValueError(f"marker_side must be +1 or -1, got {self.marker_side}")
        if self.tangent not in TANGENT_MODES:
            raise ValueError(f"Unknown tangent mode '{self.tangent}'. Valid: {TANGENT_MODES}")


def empty_collection() -> FeatureCollection:
    return {"type": "FeatureCollection", "features": []}


def build_route_features(bridge: CoordinateBridge, defn: RouteDefinition) -> List[Feature]:
    """Trim, curve and wrap one route as ``[line, marker]`` GeoJSON features."""
    start, end = trim(bridge, defn.from_anchor, defn.to_anchor)
    curve = build_curve(
        bridge,
        start,
        end,
        defn.curve,
        marker_offset_px=defn.marker_side * defn.marker_offset_px,
        tangent=defn.tangent,
    )

    base = {"routeId": defn.route_id, "markerKind": defn.marker_kind, "mode": defn.mode}
    line_feature = {
        "type": "Feature",
        "properties": {"kind": KIND_LINE, **base},
        "geometry": mapping(LineString(curve.polyline)),
    }
    marker_feature = {
        "type": "Feature",
        "properties": {"kind": KIND_MARKER, **base, "angle": curve.angle_deg},
        "geometry": mapping(Point(curve.mid)),
    }
    return [line_feature, marker_feature]
