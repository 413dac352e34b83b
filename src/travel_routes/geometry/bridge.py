"""Coordinate bridge between geographic and screen space."""
from __future__ import annotations

from typing import NamedTuple, TYPE_CHECKING

if TYPE_CHECKING:
    from travel_routes.mapview import MapView


class GeoPoint(NamedTuple):
    lon: float
    lat: float


class ScreenPoint(NamedTuple):
    """Pixel position under the viewport it was computed for. Do not keep across updates."""
    x: float
    y: float


class CoordinateBridge:
    """Thin wrapper over a map view's ``project``/``unproject`` pair.

    Holds no state of its own, so every call reflects the map's current camera.
    """

    def __init__(self, map_view: "MapView") -> None:
        self.map_view = map_view

    def project(self, point: GeoPoint) -> ScreenPoint:
        x, y = self.map_view.project(point[0], point[1])
        return ScreenPoint(float(x), float(y))

    def unproject(self, point: ScreenPoint) -> GeoPoint:
        lon, lat = self.map_view.unproject(point[0], point[1])
        return GeoPoint(float(lon), float(lat))
