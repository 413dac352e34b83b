"""Lightweight Web Mercator helpers."""
from __future__ import annotations

import math
from typing import Tuple


EARTH_RADIUS_M = 6378137.0
MERCATOR_LAT_BOUND = 85.05112878


def wrap_lon(lon: float) -> float:
    if lon > 180:
        return lon - 360
    if lon < -180:
        return lon + 360
    return lon


def clamp_lat(lat: float) -> float:
    return max(min(lat, MERCATOR_LAT_BOUND), -MERCATOR_LAT_BOUND)


def mercator_to_latlon(x: float, y: float) -> Tuple[float, float]:
    """Convert Mercator coordinates (meters) to lon/lat."""
    lat = 2 * math.degrees(math.atan(math.exp(y / EARTH_RADIUS_M))) - 90
    lon = math.degrees(x / EARTH_RADIUS_M)
    return lon, lat


def latlon_to_mercator(lon: float, lat: float) -> Tuple[float, float]:
    """Convert lon/lat to Mercator coordinates (meters)."""
    lat = clamp_lat(lat)
    x = EARTH_RADIUS_M * math.radians(lon)
    y = EARTH_RADIUS_M * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
    return x, y


def lonlat_to_world(lon: float, lat: float, world_size: float) -> Tuple[float, float]:
    """Convert lon/lat to world pixels for a square world of ``world_size`` px.

    The origin is the top-left corner (lon -180, lat +85.05), y grows southward.
    """
    mx, my = latlon_to_mercator(lon, lat)
    circumference = 2 * math.pi * EARTH_RADIUS_M
    wx = (mx / circumference + 0.5) * world_size
    wy = (0.5 - my / circumference) * world_size
    return wx, wy


def world_to_lonlat(wx: float, wy: float, world_size: float) -> Tuple[float, float]:
    circumference = 2 * math.pi * EARTH_RADIUS_M
    mx = (wx / world_size - 0.5) * circumference
    my = (0.5 - wy / world_size) * circumference
    return mercator_to_latlon(mx, my)
