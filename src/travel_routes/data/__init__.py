"""Trip data: waypoints and route definitions."""

from travel_routes.data.trip import Trip, Waypoint, load_trip

__all__ = ["Trip", "Waypoint", "load_trip"]
