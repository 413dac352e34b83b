"""Camera state for converting between geographic and screen coordinates."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from travel_routes.core.geodesy import clamp_lat, lonlat_to_world, world_to_lonlat, wrap_lon


@dataclass(frozen=True, slots=True)
class Viewport:
    """Web Mercator camera.

    Attributes:
        center_lon: Longitude at the center of the screen.
        center_lat: Latitude at the center of the screen.
        zoom: Fractional zoom level (0 shows the whole world in one tile).
        width: Screen width in pixels.
        height: Screen height in pixels.
        tile_size: Tile edge in pixels at integer zoom levels (512 for vector maps).
    """

    center_lon: float
    center_lat: float
    zoom: float
    width: int
    height: int
    tile_size: int = 512

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport size must be positive, got {self.width}x{self.height}")
        object.__setattr__(self, "center_lon", wrap_lon(self.center_lon))
        object.__setattr__(self, "center_lat", clamp_lat(self.center_lat))

    @property
    def world_size(self) -> float:
        return self.tile_size * 2.0 ** self.zoom

    def _center_world(self) -> Tuple[float, float]:
        return lonlat_to_world(self.center_lon, self.center_lat, self.world_size)

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        """Convert lon/lat to screen pixels (origin top-left, y down)."""
        size = self.world_size
        wx, wy = lonlat_to_world(lon, lat, size)
        cx, cy = self._center_world()
        return wx - cx + self.width / 2, wy - cy + self.height / 2

    def unproject(self, x: float, y: float) -> Tuple[float, float]:
        size = self.world_size
        cx, cy = self._center_world()
        wx = x - self.width / 2 + cx
        wy = y - self.height / 2 + cy
        return world_to_lonlat(wx, wy, size)

    def with_center(self, lon: float, lat: float) -> "Viewport":
        return replace(self, center_lon=lon, center_lat=lat)

    def with_zoom(self, zoom: float) -> "Viewport":
        return replace(self, zoom=zoom)

    def with_size(self, width: int, height: int) -> "Viewport":
        return replace(self, width=width, height=height)

    def pan_by(self, dx: float, dy: float) -> "Viewport":
        """Shift the camera by a screen-pixel offset."""
        lon, lat = self.unproject(self.width / 2 + dx, self.height / 2 + dy)
        return self.with_center(lon, lat)
