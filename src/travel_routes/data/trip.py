"""Waypoint catalog and route definitions loaded from a trip file."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from travel_routes.core.config import CurveConfig, PinConfig, TravelConfig
from travel_routes.geometry.bridge import GeoPoint
from travel_routes.geometry.curve import CurveParams
from travel_routes.geometry.trim import Anchor
from travel_routes.routing.features import RouteDefinition


@dataclass(frozen=True)
class Waypoint:
    """A stop on the trip, drawn as a circular pin anchored at its bottom edge.

    Small pins mark transit stops; the others show the number of nights.
    """
    name: str
    position: GeoPoint
    nights: Optional[int] = None
    small: bool = False
    start: bool = False

    def visual_radius_px(self, pins: PinConfig) -> float:
        diameter = pins.secondary_diameter_px if self.small else pins.primary_diameter_px
        return diameter / 2.0

    def anchor(self, pins: PinConfig) -> Anchor:
        return Anchor(self.position, self.visual_radius_px(pins))

    @property
    def label(self) -> str:
        if self.small or self.nights is None:
            return self.name
        return f"{self.name} ({self.nights} Night{'' if self.nights == 1 else 's'})"


@dataclass
class Trip:
    waypoints: Dict[str, Waypoint] = field(default_factory=dict)
    routes: List[RouteDefinition] = field(default_factory=list)


def curve_params(defaults: CurveConfig, overrides: Optional[dict] = None) -> CurveParams:
    params = CurveParams(
        curvature_factor=defaults.curvature_factor,
        min_px=defaults.min_px,
        max_px=defaults.max_px,
        segments=defaults.segments,
        bend=defaults.bend,
    )
    if overrides:
        params = replace(params, **overrides)
    return params


def _parse_waypoint(item: dict) -> Waypoint:
    lon, lat = item["coordinates"]
    nights = item.get("nights")
    return Waypoint(
        name=str(item["name"]),
        position=GeoPoint(float(lon), float(lat)),
        nights=int(nights) if nights is not None else None,
        small=bool(item.get("small", False)),
        start=bool(item.get("start", False)),
    )


def load_trip(path: Path, config: TravelConfig) -> Trip:
    """Read waypoints and routes from a YAML trip file.

    Route endpoints refer to waypoints by name, so each anchor radius comes
    from the same pin definition the map draws.

    Raises:
        ValueError: Unknown waypoint, duplicate name or invalid route settings.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    trip = Trip()
    for item in data.get("waypoints", []):
        waypoint = _parse_waypoint(item)
        if waypoint.name in trip.waypoints:
            raise ValueError(f"Duplicate waypoint '{waypoint.name}' in {path}")
        trip.waypoints[waypoint.name] = waypoint

    for item in data.get("routes", []):
        ends = []
        for key in ("from", "to"):
            name = item.get(key)
            if name not in trip.waypoints:
                raise ValueError(f"Route '{item.get('id')}' references unknown waypoint '{name}'")
            ends.append(trip.waypoints[name])
        origin, destination = ends
        try:
            trip.routes.append(
                RouteDefinition(
                    route_id=str(item.get("id") or f"{origin.name}->{destination.name}"),
                    from_anchor=origin.anchor(config.pins),
                    to_anchor=destination.anchor(config.pins),
                    curve=curve_params(config.curve, item.get("curve")),
                    marker_side=int(item.get("marker_side", 1)),
                    marker_offset_px=float(item.get("marker_offset_px", 0.0)),
                    marker_kind=str(item.get("marker", "car")),
                    mode=str(item.get("mode", "drive")),
                    tangent=str(item.get("tangent", "chord")),
                )
            )
        except TypeError as exc:
            raise ValueError(f"Invalid route '{item.get('id')}': {exc}") from exc
    return trip
