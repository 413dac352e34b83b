"""Route features, layer declarations and the update scheduler."""

from travel_routes.routing.features import (  # noqa: F401
    KIND_LINE,
    KIND_MARKER,
    RouteDefinition,
    build_route_features,
    empty_collection,
)
from travel_routes.routing.registry import MapContext, RouteRegistry  # noqa: F401
