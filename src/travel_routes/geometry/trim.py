"""Trim connector endpoints to the edges of the pin circles they join."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from travel_routes.geometry.bridge import CoordinateBridge, GeoPoint, ScreenPoint


@dataclass(frozen=True)
class Anchor:
    """A waypoint position plus the pixel radius of the pin drawn there.

    ``radius_px`` has to match what the pin layer renders; nothing checks it.
    """
    position: GeoPoint
    radius_px: float


def pin_center(bridge: CoordinateBridge, anchor: Anchor) -> ScreenPoint:
    """Screen-space center of a bottom-anchored circular pin."""
    p = bridge.project(anchor.position)
    return ScreenPoint(p.x, p.y - anchor.radius_px)


def trim_screen(
    a_center: ScreenPoint, b_center: ScreenPoint, a_radius: float, b_radius: float
) -> Tuple[ScreenPoint, ScreenPoint]:
    """Move each center toward the other by its own radius.

    Coincident centers use a length of 1, so the result is ``(a, b)`` unchanged
    instead of NaN.
    """
    dx = b_center.x - a_center.x
    dy = b_center.y - a_center.y
    length = math.hypot(dx, dy) or 1.0
    ux = dx / length
    uy = dy / length
    a_edge = ScreenPoint(a_center.x + ux * a_radius, a_center.y + uy * a_radius)
    b_edge = ScreenPoint(b_center.x - ux * b_radius, b_center.y - uy * b_radius)
    return a_edge, b_edge


def trim(bridge: CoordinateBridge, a: Anchor, b: Anchor) -> Tuple[GeoPoint, GeoPoint]:
    """Return geographic endpoints of the segment a→b shortened to both pin edges.

    Radii above half the center distance make the points cross over; that is
    left as is.
    """
    a_edge, b_edge = trim_screen(pin_center(bridge, a), pin_center(bridge, b), a.radius_px, b.radius_px)
    return bridge.unproject(a_edge), bridge.unproject(b_edge)
